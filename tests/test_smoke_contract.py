# tests/test_smoke_contract.py
"""
Validate arrangement.json shape: required keys exist for succeeded, failed and
cancelled outcomes. Smoke test: run the full command on a small drawing and
check the serialized report. Deterministic, no files read.
"""

from __future__ import annotations

import json

from tagorder.core.command import ArrangeCommand
from tagorder.core.document import InMemoryDocument
from tagorder.core.reporting import SCHEMA_VERSION, arrangement_to_dict, run_metadata_dict
from tagorder.core.services import PresetConfirmation, PresetSelection
from tagorder.core.types import (
    ArrangeOutcome,
    ArrangeStatus,
    HostElement,
    Label,
    PlacementConfig,
    PointLocation,
)

REQUIRED_KEYS = [
    "schema_version",
    "status",
    "count",
    "reason",
    "error_key",
    "origin",
    "config",
    "plan",
    "tags",
    "issues",
    "checks",
]

TAG_KEYS = ["id", "head_before", "head_after", "anchor", "bbox", "shift_attempts"]


def _doc() -> InMemoryDocument:
    doc = InMemoryDocument(view="Level 1")
    doc.add_host(HostElement("D1", "Doors", PointLocation((0.0, 100.0, 0.0))))
    doc.add_host(HostElement("D2", "Doors", PointLocation((60.0, 120.0, 0.0))))
    doc.add_host(HostElement("S1", "Sketch", None))
    doc.add_tag(Label("T1", (0.0, 150.0, 0.0), ("D1",), has_leader=True, text="D-01"), size=(24, 6))
    doc.add_tag(Label("T2", (60.0, 170.0, 0.0), ("D2",), text="D-02"), size=(24, 6))
    doc.add_tag(Label("T3", (9.0, 9.0, 0.0), ("S1",), text="S"), size=(10, 6))
    return doc


def _run() -> tuple[ArrangeOutcome, InMemoryDocument]:
    doc = _doc()
    outcome = ArrangeCommand(
        doc,
        PresetSelection(["T1", "T2", "T3"], (0.0, 0.0, 0.0)),
        PresetConfirmation(),
        base_config=PlacementConfig(spacing=10, margin=0),
    ).execute()
    return outcome, doc


def test_arrangement_required_keys_exist() -> None:
    outcome, doc = _run()
    data = arrangement_to_dict(outcome, doc)
    for key in REQUIRED_KEYS:
        assert key in data, f"Missing key: {key}"
    assert data["schema_version"] == SCHEMA_VERSION
    for tag in data["tags"]:
        for key in TAG_KEYS:
            assert key in tag, f"Missing tag key: {key}"


def test_smoke_run_serializes() -> None:
    outcome, doc = _run()
    assert outcome.status is ArrangeStatus.SUCCEEDED
    data = json.loads(json.dumps(arrangement_to_dict(outcome, doc)))
    assert data["status"] == "succeeded"
    assert data["count"] == 2
    assert data["plan"]["order"] == ["T1", "T2"]
    assert data["plan"]["direction"] == "increasing"
    assert data["tags"][0]["leader"]["end_condition"] == "attached"
    assert "leader" not in data["tags"][1]
    assert data["issues"][0]["id"] == "T3"
    assert data["issues"][0]["hint"]
    assert data["checks"]["overlaps_detected"] == 0
    assert data["checks"]["min_edge_gap"] == 10
    assert data["leaders_reconnected"] == 1


def test_cancelled_outcome_serializes() -> None:
    outcome = ArrangeCommand(_doc(), PresetSelection([], None), PresetConfirmation()).execute()
    data = arrangement_to_dict(outcome)
    assert data["status"] == "cancelled"
    assert data["tags"] == [] and data["issues"] == []
    assert data["checks"] is None and data["config"] is None


def test_run_metadata_shape() -> None:
    meta = run_metadata_dict("r1", "plan.json", (1.0, 2.0, 0.0), PlacementConfig())
    assert meta["run_name"] == "r1"
    assert meta["origin"] == {"x": 1.0, "y": 2.0, "z": 0.0}
    assert meta["placement"]["strategy"] == "oriented_edge"
    assert "MAX_SHIFT_ATTEMPTS" in meta["config"]
    assert "timestamp_utc" in meta
