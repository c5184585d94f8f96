# tagorder/core/sorter.py
"""
Deterministic visiting order for a set of tags.

Tags are ordered by where their anchors (the tagged elements) sit, not by
their current heads, so the order follows the drawing even when the tags are
scattered. Python's sort is stable; every key ends with the input index so the
order is total.

Horizontal: anchor X ascending (left to right).
Vertical: tags are grouped into columns by rounded anchor X. Columns nearer the
origin's X come first (left before right on a tie). Inside a column tags
farther from the origin come first, then higher anchors. The region of the
anchor set (above/below the origin) picks whether heads then grow upward or
downward.
"""

from __future__ import annotations

import logging

from tagorder.core.geometry import distance_2d, mean_xy, round_coord
from tagorder.core.log import get_logger
from tagorder.core.types import (
    GrowthDirection,
    Point3,
    Region,
    ResolvedLabel,
    Side,
    SortAxis,
    SortPlan,
)


def classify_region(anchors: list[Point3], origin: Point3) -> Region:
    """BELOW if the mean anchor Y is under the origin's Y, else ABOVE."""
    _, mean_y = mean_xy(anchors)
    return Region.BELOW if mean_y < origin[1] else Region.ABOVE


def classify_side(anchors: list[Point3], origin: Point3) -> Side:
    """LEFT if the mean anchor X is left of the origin's X, else RIGHT."""
    mean_x, _ = mean_xy(anchors)
    return Side.LEFT if mean_x < origin[0] else Side.RIGHT


def growth_direction(axis: SortAxis, region: Region | None) -> GrowthDirection:
    """
    Rows always grow left to right. Columns grow bottom-to-top when the
    anchors lie below the origin and top-to-bottom otherwise.
    """
    if axis is SortAxis.HORIZONTAL:
        return GrowthDirection.INCREASING
    if region is Region.BELOW:
        return GrowthDirection.INCREASING
    return GrowthDirection.DECREASING


def _horizontal_key(item: ResolvedLabel) -> tuple[float, int]:
    return (round_coord(item.anchor[0]), item.index)


def _vertical_key(origin: Point3):
    ox = round_coord(origin[0])

    def key(item: ResolvedLabel) -> tuple[float, float, float, float, int]:
        ax = round_coord(item.anchor[0])
        ay = round_coord(item.anchor[1])
        dist = round_coord(distance_2d(item.anchor, origin))
        return (abs(ax - ox), ax, -dist, -ay, item.index)

    return key


class LabelSorter:
    """Orders resolved tags along an axis relative to an origin."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = get_logger(__name__, logger)

    def sort(self, items: list[ResolvedLabel], axis: SortAxis, origin: Point3) -> SortPlan:
        """Visiting order and growth direction. Empty input gives an empty plan."""
        if not items:
            return SortPlan(ordered=[], axis=axis, direction=growth_direction(axis, None))

        anchors = [r.anchor for r in items]
        region = classify_region(anchors, origin)
        side = classify_side(anchors, origin)

        if axis is SortAxis.HORIZONTAL:
            ordered = sorted(items, key=_horizontal_key)
            self._log.info("Horizontal sort done (anchor X ascending), %d tags", len(ordered))
        else:
            ordered = sorted(items, key=_vertical_key(origin))
            above = sum(1 for a in anchors if a[1] > origin[1])
            self._log.info(
                "Vertical sort done (columns by anchor X, farthest first), %d tags: %d above, %d below origin Y=%.3f",
                len(ordered), above, len(ordered) - above, origin[1],
            )

        direction = growth_direction(axis, region)
        plan = SortPlan(ordered=ordered, axis=axis, direction=direction, region=region, side=side)
        self._log.debug(
            "Sort plan: axis=%s region=%s side=%s direction=%s order=%s",
            axis.value, region.value, side.value, direction.name,
            [label.label_id for label in plan.labels],
        )
        return plan
