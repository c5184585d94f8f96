# tests/test_geometry.py
"""
Deterministic tests for geometry helpers and BBox: point coercion, rounding,
box translation/expansion and shapely-backed collision tests.
"""

from __future__ import annotations

import pytest

from tagorder.core.geometry import (
    as_point3,
    bbox_from_bounds,
    boxes_overlap,
    collides_with,
    delta_2d,
    mean_xy,
    occupied_geometry,
    round_coord,
    with_axis_value,
)
from tagorder.core.types import BBox, CurveLocation, SortAxis


def test_as_point3_pads_z() -> None:
    assert as_point3([1, 2]) == (1.0, 2.0, 0.0)
    assert as_point3((1, 2, 3)) == (1.0, 2.0, 3.0)


def test_as_point3_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        as_point3([1])
    with pytest.raises(ValueError):
        as_point3([1, 2, 3, 4])


def test_with_axis_value_keeps_other_coords() -> None:
    p = (1.0, 2.0, 3.0)
    assert with_axis_value(p, SortAxis.HORIZONTAL, 9) == (9.0, 2.0, 3.0)
    assert with_axis_value(p, SortAxis.VERTICAL, 9) == (1.0, 9.0, 3.0)


def test_round_coord_groups_and_normalizes_negative_zero() -> None:
    assert round_coord(1.00049) == round_coord(1.0001)
    assert round_coord(-0.0001) == 0.0
    assert str(round_coord(-0.0001)) == "0.0"


def test_mean_xy_and_delta() -> None:
    assert mean_xy([(0, 0, 0), (10, -20, 5)]) == pytest.approx((5.0, -10.0))
    assert delta_2d((1, 1, 0), (4, -1, 7)) == (3, -2)
    with pytest.raises(ValueError):
        mean_xy([])


def test_bbox_translate_and_expand() -> None:
    b = BBox(0, 0, 10, 4)
    assert b.translated(5, -1) == BBox(5, -1, 15, 3)
    assert b.expanded(2) == BBox(-2, -2, 12, 6)
    assert b.width == 10 and b.height == 4
    assert b.center == (5.0, 2.0)


def test_degenerate_box_stays_degenerate() -> None:
    d = BBox.degenerate_at((3.0, 4.0, 0.0))
    assert d.is_degenerate
    assert d.expanded(10) == d
    assert d.to_polygon().is_empty


def test_bbox_from_bounds_orders_corners() -> None:
    assert bbox_from_bounds((10, 5, 0, 0)) == BBox(0, 0, 10, 5)


def test_boxes_overlap_touching_counts() -> None:
    a = BBox(0, 0, 10, 10)
    assert boxes_overlap(a, BBox(5, 5, 15, 15))
    assert boxes_overlap(a, BBox(10, 0, 20, 10))
    assert not boxes_overlap(a, BBox(10.5, 0, 20, 10))


def test_degenerate_box_never_overlaps() -> None:
    a = BBox(0, 0, 10, 10)
    assert not boxes_overlap(a, BBox.degenerate_at((5.0, 5.0, 0.0)))


def test_collides_with_union() -> None:
    occupied = occupied_geometry([BBox(0, 0, 10, 10), BBox(30, 0, 40, 10)])
    assert collides_with(BBox(35, 5, 50, 8), occupied)
    assert not collides_with(BBox(15, 0, 25, 10), occupied)
    assert not collides_with(BBox(0, 0, 10, 10), None)
    assert occupied_geometry([]).is_empty


def test_curve_location_needs_two_points() -> None:
    with pytest.raises(ValueError):
        CurveLocation(((0.0, 0.0, 0.0),))
    c = CurveLocation(((1.0, 2.0, 0.0), (5.0, 2.0, 0.0)))
    assert c.reference_point == (1.0, 2.0, 0.0)
    assert c.as_linestring().length == pytest.approx(4.0)
