# tests/test_leaders.py
"""
Leader reconnection: straight leaders attach to the anchor, L-shaped leaders
get one elbow so both segments are axis-aligned.
"""

from __future__ import annotations

import pytest

from tagorder.core.document import InMemoryDocument
from tagorder.core.leaders import LeaderConnector, elbow_point, leader_path
from tagorder.core.types import Label, LeaderEndCondition, LeaderStyle, SortAxis

HEAD = (200.0, 500.0, 0.0)
ANCHOR = (40.0, 100.0, 0.0)


def _doc(has_leader: bool = True) -> InMemoryDocument:
    doc = InMemoryDocument()
    doc.add_tag(Label("T1", HEAD, ("W1",), has_leader=has_leader), size=(20, 5))
    return doc


def test_elbow_point_is_axis_aligned() -> None:
    row = elbow_point(HEAD, ANCHOR, SortAxis.HORIZONTAL)
    assert row == (200.0, 100.0, 0.0)
    col = elbow_point(HEAD, ANCHOR, SortAxis.VERTICAL)
    assert col == (40.0, 500.0, 0.0)
    for elbow in (row, col):
        assert elbow[0] in (HEAD[0], ANCHOR[0]) and elbow[1] in (HEAD[1], ANCHOR[1])


def test_leader_path_lengths() -> None:
    straight = leader_path((0.0, 0.0, 0.0), (3.0, 4.0, 0.0))
    assert straight.length == pytest.approx(5.0)
    bent = leader_path((0.0, 0.0, 0.0), (3.0, 4.0, 0.0), (0.0, 4.0, 0.0))
    assert bent.length == pytest.approx(7.0)


def test_straight_leader_attached() -> None:
    doc = _doc()
    txn = doc.transaction("t")
    txn.start()
    assert LeaderConnector(doc).reconnect(doc.get_label("T1"), ANCHOR, LeaderStyle.STRAIGHT)
    label = doc.get_label("T1")
    assert label.leader_end_condition is LeaderEndCondition.ATTACHED
    assert label.leader_end == ANCHOR
    assert label.leader_elbow is None
    txn.commit()


def test_l_shape_leader_free_with_elbow() -> None:
    doc = _doc()
    txn = doc.transaction("t")
    txn.start()
    connector = LeaderConnector(doc, axis=SortAxis.VERTICAL)
    assert connector.reconnect(doc.get_label("T1"), ANCHOR, LeaderStyle.L_SHAPE)
    label = doc.get_label("T1")
    assert label.leader_end_condition is LeaderEndCondition.FREE
    assert label.leader_end == ANCHOR
    assert label.leader_elbow == (40.0, 500.0, 0.0)
    txn.commit()


def test_no_leader_or_no_anchor_is_noop() -> None:
    doc = _doc(has_leader=False)
    connector = LeaderConnector(doc)
    # no transaction needed: nothing is written
    assert connector.reconnect(doc.get_label("T1"), ANCHOR, LeaderStyle.STRAIGHT) is False
    doc2 = _doc()
    assert LeaderConnector(doc2).reconnect(doc2.get_label("T1"), None, LeaderStyle.L_SHAPE) is False
    assert doc2.get_label("T1").leader_end is None
