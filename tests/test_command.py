# tests/test_command.py
"""
Arrange command flow: cancelling any prompt leaves the document untouched;
errors become FAILED outcomes with an error key.
"""

from __future__ import annotations

from tagorder.core import error_codes
from tagorder.core.command import ArrangeCommand
from tagorder.core.document import InMemoryDocument
from tagorder.core.services import PresetConfirmation, PresetSelection
from tagorder.core.types import (
    ArrangeStatus,
    HostElement,
    Label,
    LeaderStyle,
    PlacementConfig,
    PlacementStrategy,
    PointLocation,
    SortAxis,
)

ORIGIN = (0.0, 0.0, 0.0)


def _doc() -> InMemoryDocument:
    doc = InMemoryDocument()
    for i, x in enumerate((30.0, 0.0, 90.0)):
        doc.add_host(HostElement(f"H{i}", "Generic", PointLocation((x, 200.0, 0.0))))
        doc.add_tag(Label(f"T{i}", (x, 250.0, 0.0), (f"H{i}",), has_leader=True), size=(20, 6))
    return doc


class _NoAnswers:
    """Confirmation that cancels one chosen prompt."""

    def __init__(self, cancel_title: str) -> None:
        self.cancel_title = cancel_title
        self.asked: list[str] = []

    def choose(self, title, options, default=None):
        self.asked.append(title)
        return None if title == self.cancel_title else default


class _Rejecting(InMemoryDocument):
    def _before_commit(self, txn) -> None:
        raise RuntimeError("locked")


def _heads(doc: InMemoryDocument) -> list:
    return [doc.get_label(t).head_position for t in doc.label_ids()]


def test_command_succeeds_with_preset_answers() -> None:
    doc = _doc()
    cmd = ArrangeCommand(
        doc,
        PresetSelection(["T0", "T1", "T2", "H0"], ORIGIN),
        PresetConfirmation({SortAxis: SortAxis.HORIZONTAL, LeaderStyle: LeaderStyle.L_SHAPE}),
    )
    outcome = cmd.execute()
    assert outcome.status is ArrangeStatus.SUCCEEDED
    assert outcome.count == 3
    assert outcome.config.leader_style is LeaderStyle.L_SHAPE
    assert outcome.origin == ORIGIN
    assert [p.label.label_id for p in outcome.report.placed] == ["T1", "T0", "T2"]


def test_empty_selection_is_cancel() -> None:
    doc = _doc()
    before = _heads(doc)
    outcome = ArrangeCommand(doc, PresetSelection([], ORIGIN), PresetConfirmation()).execute()
    assert outcome.status is ArrangeStatus.CANCELLED
    assert outcome.error_key == error_codes.USER_CANCELLED
    assert _heads(doc) == before


def test_non_tag_selection_is_cancel() -> None:
    outcome = ArrangeCommand(_doc(), PresetSelection(["H0", "H1"], ORIGIN), PresetConfirmation()).execute()
    assert outcome.status is ArrangeStatus.CANCELLED


def test_cancel_at_each_choice() -> None:
    for title in ("Sort axis", "Leader style"):
        doc = _doc()
        before = _heads(doc)
        confirmation = _NoAnswers(title)
        outcome = ArrangeCommand(doc, PresetSelection(["T0"], ORIGIN), confirmation).execute()
        assert outcome.status is ArrangeStatus.CANCELLED
        assert confirmation.asked[-1] == title
        assert _heads(doc) == before
        assert doc.commit_count == 0


def test_cancel_origin_pick() -> None:
    doc = _doc()
    outcome = ArrangeCommand(doc, PresetSelection(["T0"], None), PresetConfirmation()).execute()
    assert outcome.status is ArrangeStatus.CANCELLED
    assert doc.commit_count == 0


def test_base_config_is_kept_except_prompted_fields() -> None:
    base = PlacementConfig(strategy=PlacementStrategy.OVERLAP_REPAIR, spacing=33, margin=4)
    outcome = ArrangeCommand(
        _doc(),
        PresetSelection(["T0", "T1"], ORIGIN),
        PresetConfirmation({SortAxis: SortAxis.VERTICAL}),
        base_config=base,
    ).execute()
    assert outcome.status is ArrangeStatus.SUCCEEDED
    assert outcome.config.axis is SortAxis.VERTICAL
    assert outcome.config.strategy is PlacementStrategy.OVERLAP_REPAIR
    assert outcome.config.spacing == 33


def test_switching_axis_takes_that_axis_default_lengths() -> None:
    base = PlacementConfig.for_axis(SortAxis.HORIZONTAL)
    outcome = ArrangeCommand(
        _doc(),
        PresetSelection(["T0", "T1"], ORIGIN),
        PresetConfirmation({SortAxis: SortAxis.VERTICAL}),
        base_config=base,
    ).execute()
    assert outcome.status is ArrangeStatus.SUCCEEDED
    assert outcome.config.axis is SortAxis.VERTICAL
    assert (outcome.config.spacing, outcome.config.margin) == (150, 30)


def test_commit_failure_reported_as_failed() -> None:
    doc = _Rejecting()
    doc.add_host(HostElement("H0", "Generic", PointLocation((0.0, 0.0, 0.0))))
    doc.add_tag(Label("T0", (5.0, 5.0, 0.0), ("H0",)), size=(10, 4))
    outcome = ArrangeCommand(doc, PresetSelection(["T0"], ORIGIN), PresetConfirmation()).execute()
    assert outcome.status is ArrangeStatus.FAILED
    assert outcome.error_key == error_codes.COMMIT_FAILED
    assert outcome.count == 0
    assert doc.get_label("T0").head_position == (5.0, 5.0, 0.0)
