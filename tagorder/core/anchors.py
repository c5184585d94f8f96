# tagorder/core/anchors.py
"""
Anchor resolution: the point a tag refers to, read from its tagged element.
Point locations give the point itself; curve locations give their start point.
"""

from __future__ import annotations

import logging

from tagorder.core import error_codes
from tagorder.core.errors import AnchorResolutionError
from tagorder.core.interfaces import DocumentStore
from tagorder.core.log import get_logger
from tagorder.core.types import CurveLocation, Label, LabelIssue, Point3, PointLocation, ResolvedLabel


class AnchorResolver:
    """Looks up the tagged element of a label and returns its representative point."""

    def __init__(self, document: DocumentStore, logger: logging.Logger | None = None) -> None:
        self._doc = document
        self._log = get_logger(__name__, logger)

    def resolve(self, label: Label) -> Point3 | None:
        """Anchor point of label, or None when it cannot be resolved."""
        try:
            return self.resolve_or_raise(label)
        except AnchorResolutionError as e:
            self._log.warning("Tag %s: %s", label.label_id, e)
            return None

    def resolve_or_raise(self, label: Label) -> Point3:
        """Anchor point of label; raises AnchorResolutionError with the reason."""
        if len(label.tagged_ids) != 1:
            raise AnchorResolutionError(
                f"expected exactly one tagged element, found {len(label.tagged_ids)}"
            )
        element_id = label.tagged_ids[0]
        element = self._doc.get_element(element_id)
        if element is None:
            raise AnchorResolutionError(f"tagged element {element_id} not found")
        location = element.location
        if isinstance(location, PointLocation):
            return location.point
        if isinstance(location, CurveLocation):
            return location.reference_point
        raise AnchorResolutionError(f"tagged element {element_id} has no point or curve location")

    def resolve_all(self, label_ids: list[str]) -> tuple[list[ResolvedLabel], list[LabelIssue]]:
        """
        Resolve every selected tag, keeping input order in ResolvedLabel.index.
        Missing tags and unresolved anchors are reported as issues, not raised.
        """
        resolved: list[ResolvedLabel] = []
        issues: list[LabelIssue] = []
        for i, label_id in enumerate(label_ids):
            label = self._doc.get_label(label_id)
            if label is None:
                self._log.warning("Tag %s not found; skipped", label_id)
                issues.append(LabelIssue(label_id, error_codes.LABEL_MISSING, "tag not found"))
                continue
            try:
                anchor = self.resolve_or_raise(label)
            except AnchorResolutionError as e:
                self._log.warning("Tag %s skipped: %s", label_id, e)
                issues.append(LabelIssue(label_id, e.error_key, str(e)))
                continue
            resolved.append(ResolvedLabel(label=label, anchor=anchor, index=i))
        self._log.debug("Resolved %d of %d tags", len(resolved), len(label_ids))
        return resolved, issues
