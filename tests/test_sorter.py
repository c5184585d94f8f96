# tests/test_sorter.py
"""
Deterministic ordering: anchor X ascending for rows, columns by anchor X with
the farthest tag from the origin first, region/side classification and
growth direction.
"""

from __future__ import annotations

from tagorder.core.sorter import LabelSorter, classify_region, classify_side, growth_direction
from tagorder.core.types import (
    GrowthDirection,
    Label,
    Region,
    ResolvedLabel,
    Side,
    SortAxis,
)

ORIGIN = (0.0, 0.0, 0.0)


def _items(anchors: list[tuple[float, float]]) -> list[ResolvedLabel]:
    return [
        ResolvedLabel(Label(f"T{i}", (999.0, 999.0, 0.0)), (x, y, 0.0), i)
        for i, (x, y) in enumerate(anchors)
    ]


def _order(plan) -> list[str]:
    return [r.label.label_id for r in plan.ordered]


def test_horizontal_sort_by_anchor_x() -> None:
    plan = LabelSorter().sort(_items([(120, 0), (0, 0), (50, 0)]), SortAxis.HORIZONTAL, ORIGIN)
    assert _order(plan) == ["T1", "T2", "T0"]
    assert plan.direction is GrowthDirection.INCREASING


def test_horizontal_ties_keep_input_order() -> None:
    plan = LabelSorter().sort(_items([(10, 5), (10.0001, -5), (10, 0)]), SortAxis.HORIZONTAL, ORIGIN)
    assert _order(plan) == ["T0", "T1", "T2"]


def test_vertical_column_farthest_first() -> None:
    plan = LabelSorter().sort(_items([(0, 100), (0, 300), (0, -50)]), SortAxis.VERTICAL, ORIGIN)
    assert _order(plan) == ["T1", "T0", "T2"]


def test_vertical_distance_beats_anchor_height() -> None:
    plan = LabelSorter().sort(_items([(0, 10), (0, -100)]), SortAxis.VERTICAL, ORIGIN)
    assert _order(plan) == ["T1", "T0"]


def test_vertical_equal_distance_higher_anchor_first() -> None:
    plan = LabelSorter().sort(_items([(0, -40), (0, 40)]), SortAxis.VERTICAL, ORIGIN)
    assert _order(plan) == ["T1", "T0"]


def test_vertical_mirror_columns_left_first() -> None:
    plan = LabelSorter().sort(_items([(-5, 100), (5, 300), (-5, 200)]), SortAxis.VERTICAL, ORIGIN)
    assert _order(plan) == ["T2", "T0", "T1"]


def test_vertical_ties_nearest_column_first() -> None:
    items = _items([(80, 100), (-10, 100), (30, 100), (30, 100)])
    plan = LabelSorter().sort(items, SortAxis.VERTICAL, ORIGIN)
    assert _order(plan) == ["T1", "T2", "T3", "T0"]


def test_sort_ignores_current_heads() -> None:
    items = _items([(50, 0), (0, 0)])
    items[0] = ResolvedLabel(Label("T0", (-500.0, 0.0, 0.0)), (50.0, 0.0, 0.0), 0)
    plan = LabelSorter().sort(items, SortAxis.HORIZONTAL, ORIGIN)
    assert _order(plan) == ["T1", "T0"]


def test_sort_is_deterministic() -> None:
    anchors = [(3, 7), (3, 7), (-2, 7), (5, 1), (3, 7.0004)]
    first = _order(LabelSorter().sort(_items(anchors), SortAxis.VERTICAL, ORIGIN))
    for _ in range(5):
        assert _order(LabelSorter().sort(_items(anchors), SortAxis.VERTICAL, ORIGIN)) == first


def test_region_and_side() -> None:
    below = [(-10.0, -300.0, 0.0), (-30.0, -100.0, 0.0)]
    assert classify_region(below, ORIGIN) is Region.BELOW
    assert classify_side(below, ORIGIN) is Side.LEFT
    assert classify_region([(0.0, 0.0, 0.0)], ORIGIN) is Region.ABOVE
    assert classify_side([(0.0, 0.0, 0.0)], ORIGIN) is Side.RIGHT


def test_growth_direction() -> None:
    assert growth_direction(SortAxis.HORIZONTAL, Region.BELOW) is GrowthDirection.INCREASING
    assert growth_direction(SortAxis.VERTICAL, Region.BELOW) is GrowthDirection.INCREASING
    assert growth_direction(SortAxis.VERTICAL, Region.ABOVE) is GrowthDirection.DECREASING


def test_vertical_plan_below_origin_grows_upward() -> None:
    plan = LabelSorter().sort(_items([(0, -100), (0, -300)]), SortAxis.VERTICAL, ORIGIN)
    assert plan.region is Region.BELOW
    assert plan.direction is GrowthDirection.INCREASING


def test_empty_input_gives_empty_plan() -> None:
    plan = LabelSorter().sort([], SortAxis.VERTICAL, ORIGIN)
    assert plan.ordered == []
    assert plan.labels == []
