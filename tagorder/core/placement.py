# tagorder/core/placement.py
"""
Target head positions for sorted tags along one axis.

Two strategies:
- ORIENTED_EDGE keeps a running trailing edge. Each tag's leading edge sits
  exactly `spacing` past the previous trailing edge, whatever the box sizes;
  no retries are needed.
- OVERLAP_REPAIR puts tag i at origin + i * spacing, then pushes it along the
  axis by `shift_step` while its margin-expanded box touches any box already
  placed. The loop is bounded by `max_shift_attempts`.

Placement is sequential and forward-only: earlier tags are never revisited.
The cross-axis coordinate of every head is the origin's; z stays the tag's own.
"""

from __future__ import annotations

import logging
from typing import Callable

from shapely.geometry.base import BaseGeometry

from tagorder.core import error_codes
from tagorder.core.bounds import BoundsCalculator
from tagorder.core.errors import PlacementRetryExhausted, StrictModeAbort
from tagorder.core.geometry import collides_with, occupied_geometry
from tagorder.core.log import get_logger
from tagorder.core.types import (
    BBox,
    Label,
    LabelIssue,
    Placement,
    PlacementConfig,
    PlacementOutcome,
    PlacementStrategy,
    Point3,
    ResolvedLabel,
    SortAxis,
    SortPlan,
)


def target_head(label: Label, origin: Point3, axis: SortAxis, axis_value: float) -> Point3:
    """Head on the layout line through origin, at axis_value along the axis."""
    z = label.head_position[2]
    if axis is SortAxis.HORIZONTAL:
        return (float(axis_value), origin[1], z)
    return (origin[0], float(axis_value), z)


class PlacementEngine:
    """Computes non-overlapping heads for a sort plan."""

    def __init__(self, bounds: BoundsCalculator, logger: logging.Logger | None = None) -> None:
        self._bounds = bounds
        self._log = get_logger(__name__, logger)

    def place(
        self,
        plan: SortPlan,
        origin: Point3,
        config: PlacementConfig,
        on_placed: Callable[[Placement], None] | None = None,
    ) -> PlacementOutcome:
        """
        Placements in plan order. Per-tag failures become issues unless config.strict.
        on_placed is called as soon as a tag's head is decided (e.g. to move it in the
        document); a tag whose callback fails is skipped and does not occupy space.
        """
        if plan.axis is not config.axis:
            self._log.warning(
                "Sort axis %s differs from config axis %s; using sort axis",
                plan.axis.value, config.axis.value,
            )
        if config.strategy is PlacementStrategy.OVERLAP_REPAIR:
            outcome = self._place_with_repair(plan, origin, config, on_placed)
        else:
            outcome = self._place_oriented(plan, origin, config, on_placed)
        self._log.info(
            "Placement (%s) done: %d placed, %d issues",
            config.strategy.value, len(outcome.placements), len(outcome.issues),
        )
        return outcome

    def _fail(self, item: ResolvedLabel, exc: Exception, config: PlacementConfig, outcome: PlacementOutcome) -> None:
        label_id = item.label.label_id
        if config.strict:
            raise StrictModeAbort(f"tag {label_id} could not be placed: {exc}") from exc
        self._log.warning("Tag %s skipped during placement: %s", label_id, exc, exc_info=True)
        outcome.issues.append(LabelIssue(label_id, error_codes.PLACEMENT_FAILED, str(exc)))

    def _commit(
        self,
        item: ResolvedLabel,
        placement: Placement,
        on_placed: Callable[[Placement], None] | None,
        config: PlacementConfig,
        outcome: PlacementOutcome,
    ) -> bool:
        """Hand the placement to the caller; False if that failed and the tag was skipped."""
        if on_placed is not None:
            try:
                on_placed(placement)
            except Exception as e:
                self._fail(item, e, config, outcome)
                return False
        outcome.placements.append(placement)
        return True

    def _place_oriented(
        self,
        plan: SortPlan,
        origin: Point3,
        config: PlacementConfig,
        on_placed: Callable[[Placement], None] | None,
    ) -> PlacementOutcome:
        axis = plan.axis
        sign = plan.direction.sign
        outcome = PlacementOutcome()
        trailing: float | None = None

        for item in plan.ordered:
            label = item.label
            try:
                lead, trail = self._bounds.head_offsets(label, axis, plan.direction)
                if trailing is None:
                    head_value = origin[axis.index]
                else:
                    leading_edge = trailing + sign * config.spacing
                    head_value = leading_edge + sign * lead
                head = target_head(label, origin, axis, head_value)
                bbox = self._bounds.bounds_at(label, head)
            except Exception as e:
                self._fail(item, e, config, outcome)
                continue
            placement = Placement(label=label, anchor=item.anchor, head=head, bbox=bbox)
            if not self._commit(item, placement, on_placed, config, outcome):
                continue
            trailing = head_value + sign * trail
            self._log.debug(
                "Tag %s -> head %.3f on %s, trailing edge %.3f",
                label.label_id, head_value, axis.value, trailing,
            )
        return outcome

    def _place_with_repair(
        self,
        plan: SortPlan,
        origin: Point3,
        config: PlacementConfig,
        on_placed: Callable[[Placement], None] | None,
    ) -> PlacementOutcome:
        axis = plan.axis
        sign = plan.direction.sign
        outcome = PlacementOutcome()
        placed_boxes: list[BBox] = []

        for i, item in enumerate(plan.ordered):
            label = item.label
            occupied: BaseGeometry | None = occupied_geometry(placed_boxes) if placed_boxes else None
            try:
                value = origin[axis.index] + sign * i * config.spacing
                head = target_head(label, origin, axis, value)
                bbox = self._bounds.bounds_at(label, head)
                attempts = 0
                while collides_with(bbox.expanded(config.margin), occupied):
                    if attempts >= config.max_shift_attempts:
                        raise PlacementRetryExhausted(
                            f"still overlapping after {attempts} shifts of {config.shift_step}"
                        )
                    value += sign * config.shift_step
                    attempts += 1
                    head = target_head(label, origin, axis, value)
                    bbox = self._bounds.bounds_at(label, head)
            except PlacementRetryExhausted as e:
                if config.strict:
                    raise StrictModeAbort(f"tag {label.label_id}: {e}") from e
                self._log.warning("Tag %s: %s; kept last candidate", label.label_id, e)
                outcome.issues.append(LabelIssue(label.label_id, e.error_key, str(e)))
            except Exception as e:
                self._fail(item, e, config, outcome)
                continue
            placement = Placement(label=label, anchor=item.anchor, head=head, bbox=bbox, attempts=attempts)
            if not self._commit(item, placement, on_placed, config, outcome):
                continue
            placed_boxes.append(bbox.expanded(config.margin))
            if attempts:
                self._log.debug("Tag %s shifted %d times to %.3f", label.label_id, attempts, value)
        return outcome
