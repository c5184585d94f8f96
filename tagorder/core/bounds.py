# tagorder/core/bounds.py
"""
Box of a tag at a hypothetical head position.

The document reports a tag's visual bounds, which are generally not centred
on the head point (text justification, leader shoulder). The box is read at the
tag's current head and moved rigidly to the candidate head, so candidates can be
tested without mutating the tag. Head and box are always read together from
the document; a box is never reused across a position change.
"""

from __future__ import annotations

import logging

from tagorder.core import error_codes
from tagorder.core.errors import GeometryQueryError
from tagorder.core.geometry import delta_2d
from tagorder.core.interfaces import DocumentStore
from tagorder.core.log import get_logger
from tagorder.core.types import BBox, GrowthDirection, Label, LabelIssue, Point3, SortAxis


class BoundsCalculator:
    """Re-derives a tag's box at any head position by translation."""

    def __init__(
        self,
        document: DocumentStore,
        view: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._doc = document
        self._view = view
        self._log = get_logger(__name__, logger)
        self.issues: list[LabelIssue] = []
        self._warned: set[str] = set()

    def _current(self, label: Label) -> tuple[Point3, BBox | None]:
        """Current head and box, read from the document in one go."""
        fresh = self._doc.get_label(label.label_id) or label
        try:
            box = self._doc.bounding_box(label.label_id, self._view)
        except GeometryQueryError as e:
            self._warn_unavailable(label.label_id, str(e))
            return fresh.head_position, None
        if box is None:
            self._warn_unavailable(label.label_id, "no bounding box in view")
        return fresh.head_position, box

    def _warn_unavailable(self, label_id: str, reason: str) -> None:
        if label_id in self._warned:
            return
        self._warned.add(label_id)
        self._log.warning("Tag %s: %s; treated as a point", label_id, reason)
        self.issues.append(LabelIssue(label_id, error_codes.BBOX_UNAVAILABLE, reason))

    def current_bounds(self, label: Label) -> BBox:
        head, box = self._current(label)
        return box if box is not None else BBox.degenerate_at(head)

    def bounds_at(self, label: Label, hypothetical_head: Point3) -> BBox:
        """Box the tag would occupy with its head at hypothetical_head."""
        head, box = self._current(label)
        if box is None:
            return BBox.degenerate_at(hypothetical_head)
        dx, dy = delta_2d(head, hypothetical_head)
        return box.translated(dx, dy)

    def head_offsets(
        self,
        label: Label,
        axis: SortAxis,
        direction: GrowthDirection,
    ) -> tuple[float, float]:
        """
        (leading, trailing) distances from the head to the box edges along axis.
        Leading faces the previously placed tag; trailing faces the next one.
        Both are signed so that head + sign * trailing is the trailing edge.
        """
        head, box = self._current(label)
        if box is None:
            return 0.0, 0.0
        h = head[axis.index]
        if direction is GrowthDirection.INCREASING:
            return h - box.low(axis), box.high(axis) - h
        return box.high(axis) - h, h - box.low(axis)
