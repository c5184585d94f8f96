# tagorder/core/leaders.py
"""
Leader reconnection after a tag has moved.

Straight leaders run from the head directly to the anchor and stay attached.
L-shaped leaders are free-ended with one elbow so both segments are
axis-aligned: in a row the leader drops from the head (elbow below/above the
head at the anchor's Y); in a column it runs sideways from the head (elbow at
the anchor's X on the head's Y).
"""

from __future__ import annotations

import logging

from shapely.geometry import LineString

from tagorder.core.interfaces import DocumentStore
from tagorder.core.log import get_logger
from tagorder.core.types import Label, LeaderEndCondition, LeaderStyle, Point3, SortAxis


def elbow_point(head: Point3, anchor: Point3, axis: SortAxis) -> Point3:
    """Elbow sharing one coordinate with the head and the other with the anchor."""
    if axis is SortAxis.HORIZONTAL:
        return (head[0], anchor[1], head[2])
    return (anchor[0], head[1], head[2])


def leader_path(head: Point3, anchor: Point3, elbow: Point3 | None = None) -> LineString:
    """Leader as a polyline head -> [elbow] -> anchor."""
    pts = [head] + ([elbow] if elbow is not None else []) + [anchor]
    return LineString([(p[0], p[1]) for p in pts])


class LeaderConnector:
    """Rewires a tag's leader between its head and its anchor."""

    def __init__(
        self,
        document: DocumentStore,
        axis: SortAxis = SortAxis.HORIZONTAL,
        logger: logging.Logger | None = None,
    ) -> None:
        self._doc = document
        self._axis = axis
        self._log = get_logger(__name__, logger)

    def reconnect(self, label: Label, anchor_point: Point3 | None, style: LeaderStyle) -> bool:
        """
        Reconnect label's leader. Returns False (no-op) when the tag has no leader
        or the anchor is unknown; True when the document was updated.
        """
        if not label.has_leader:
            self._log.debug("Tag %s has no leader; nothing to reconnect", label.label_id)
            return False
        if anchor_point is None:
            self._log.debug("Tag %s anchor not resolvable; leader left as is", label.label_id)
            return False

        if style is LeaderStyle.L_SHAPE:
            elbow = elbow_point(label.head_position, anchor_point, self._axis)
            self._doc.set_leader(label.label_id, LeaderEndCondition.FREE, anchor_point, elbow)
            self._log.debug(
                "Tag %s: L leader via elbow (%.3f, %.3f)", label.label_id, elbow[0], elbow[1]
            )
        else:
            self._doc.set_leader(label.label_id, LeaderEndCondition.ATTACHED, anchor_point, None)
            self._log.debug("Tag %s: straight leader attached", label.label_id)
        return True
