# tests/test_bounds.py
"""
Bounds at hypothetical heads: the box moves rigidly with the head, off-centre
boxes keep their offset, and tags without a box are treated as points.
"""

from __future__ import annotations

import pytest

from tagorder.core import error_codes
from tagorder.core.bounds import BoundsCalculator
from tagorder.core.document import InMemoryDocument
from tagorder.core.errors import GeometryQueryError
from tagorder.core.types import BBox, GrowthDirection, Label, SortAxis


def _doc() -> InMemoryDocument:
    doc = InMemoryDocument()
    # 40 x 10 box whose centre sits 15 right of the head
    doc.add_tag(Label("T1", (100.0, 0.0, 0.0)), size=(40, 10), box_offset=(15, 0))
    doc.add_tag(Label("HIDDEN", (0.0, 0.0, 0.0)), size=(40, 10), visible=False)
    return doc


class _BrokenDocument(InMemoryDocument):
    def bounding_box(self, label_id, view=None):
        raise GeometryQueryError("view not regenerated")


def test_bounds_at_translates_rigidly() -> None:
    doc = _doc()
    calc = BoundsCalculator(doc)
    label = doc.get_label("T1")
    assert calc.current_bounds(label) == BBox(95, -5, 135, 5)
    moved = calc.bounds_at(label, (0.0, 50.0, 0.0))
    assert moved == BBox(-5, 45, 35, 55)
    assert doc.get_label("T1").head_position == (100.0, 0.0, 0.0)


def test_head_offsets_follow_direction() -> None:
    doc = _doc()
    calc = BoundsCalculator(doc)
    label = doc.get_label("T1")
    assert calc.head_offsets(label, SortAxis.HORIZONTAL, GrowthDirection.INCREASING) == pytest.approx((5, 35))
    assert calc.head_offsets(label, SortAxis.HORIZONTAL, GrowthDirection.DECREASING) == pytest.approx((35, 5))
    assert calc.head_offsets(label, SortAxis.VERTICAL, GrowthDirection.INCREASING) == pytest.approx((5, 5))


def test_hidden_tag_is_a_point_and_warns_once() -> None:
    doc = _doc()
    calc = BoundsCalculator(doc)
    label = doc.get_label("HIDDEN")
    box = calc.bounds_at(label, (7.0, 8.0, 0.0))
    assert box.is_degenerate
    assert box.center == (7.0, 8.0)
    calc.current_bounds(label)
    assert calc.head_offsets(label, SortAxis.HORIZONTAL, GrowthDirection.INCREASING) == (0.0, 0.0)
    assert [i.error_key for i in calc.issues] == [error_codes.BBOX_UNAVAILABLE]


def test_geometry_query_error_degrades_to_point() -> None:
    doc = _BrokenDocument()
    doc.add_tag(Label("T1", (1.0, 2.0, 0.0)), size=(10, 10))
    calc = BoundsCalculator(doc)
    box = calc.current_bounds(doc.get_label("T1"))
    assert box.is_degenerate
    assert calc.issues[0].message == "view not regenerated"
