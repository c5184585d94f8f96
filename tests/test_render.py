# tests/test_render.py
"""
Rendering: the drawing extent covers curve hosts, tag boxes and the origin,
and a PNG is written.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from tagorder.core.document import InMemoryDocument
from tagorder.core.render import _drawing_extent, render_drawing
from tagorder.core.types import CurveLocation, HostElement, Label


def _doc() -> InMemoryDocument:
    doc = InMemoryDocument()
    doc.add_host(HostElement("W1", "Walls", CurveLocation(((-50.0, 10.0, 0.0), (0.0, 10.0, 0.0), (0.0, 80.0, 0.0)))))
    doc.add_tag(Label("T1", (400.0, 20.0, 0.0), ("W1",), has_leader=True), size=(60, 8))
    return doc


def test_extent_covers_curve_box_and_origin() -> None:
    doc = _doc()
    box = doc.bounding_box("T1")
    extent = _drawing_extent(doc, (10.0, -30.0, 0.0))
    assert extent == pytest.approx((-50.0, -30.0, box.max_x, 80.0))


def test_render_writes_png() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        out = Path(tmp) / "after.png"
        render_drawing(_doc(), out, origin=(0.0, 0.0, 0.0), width_px=200, height_px=150)
        assert out.exists()
        assert out.stat().st_size > 0
