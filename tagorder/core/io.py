# tagorder/core/io.py
"""
Load and save drawing files (JSON) as InMemoryDocument.

    {
      "units": "mm", "view": "Level 1", "text_height_mm": 2.5,
      "hosts": [{"id": "W1", "category": "Walls",
                 "location": {"type": "curve", "coords": [[0, 0], [4000, 0]]}},
                {"id": "D1", "location": {"type": "point", "xyz": [1200, 300, 0]}}],
      "tags": [{"id": "T1", "text": "W1", "head": [150, 900, 0], "tagged": ["W1"],
                "has_leader": true, "leader_end_condition": "attached",
                "size": [40, 8], "box_offset": [18, 0], "visible": true}]
    }

Tags without "size" are sized from their text (Pillow metrics).
Invalid files raise ValueError; missing files raise FileNotFoundError.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from tagorder.core.config import DEFAULT_FONT_FAMILY, DEFAULT_TEXT_HEIGHT_MM
from tagorder.core.document import InMemoryDocument
from tagorder.core.geometry import as_point3
from tagorder.core.text_metrics import tag_box_size_mm
from tagorder.core.types import (
    CurveLocation,
    HostElement,
    Label,
    LeaderEndCondition,
    Location,
    PointLocation,
)


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def _point(value: Any, what: str):
    try:
        return as_point3(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{what}: invalid point {value!r}") from e


def _parse_location(data: dict | None, host_id: str) -> Location | None:
    if not data:
        return None
    kind = str(data.get("type", "")).lower()
    if kind == "point":
        return PointLocation(_point(data.get("xyz"), f"host {host_id}"))
    if kind == "curve":
        coords = data.get("coords") or []
        try:
            return CurveLocation(tuple(_point(c, f"host {host_id}") for c in coords))
        except ValueError as e:
            raise ValueError(f"host {host_id}: {e}") from e
    raise ValueError(f"host {host_id}: unknown location type {kind!r}")


def _parse_size(value: Any, tag_id: str) -> tuple[float, float]:
    try:
        w, h = (float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"tag {tag_id}: invalid size {value!r}") from e
    if w < 0 or h < 0:
        raise ValueError(f"tag {tag_id}: negative size {value!r}")
    return (w, h)


def parse_drawing(data: dict) -> InMemoryDocument:
    """Build a document from parsed drawing JSON. Does not touch the filesystem."""
    if not isinstance(data, dict):
        raise ValueError("Drawing must be a JSON object")
    doc = InMemoryDocument(units=str(data.get("units", "mm")), view=data.get("view"))
    text_height = float(data.get("text_height_mm", DEFAULT_TEXT_HEIGHT_MM))
    font_family = str(data.get("font_family", DEFAULT_FONT_FAMILY))

    for h in data.get("hosts", []):
        host_id = str(h.get("id", "")).strip()
        if not host_id:
            raise ValueError("host without id")
        if doc.get_element(host_id) is not None:
            raise ValueError(f"duplicate host id {host_id}")
        doc.add_host(HostElement(host_id, str(h.get("category", "")), _parse_location(h.get("location"), host_id)))

    for t in data.get("tags", []):
        tag_id = str(t.get("id", "")).strip()
        if not tag_id:
            raise ValueError("tag without id")
        if doc.is_tag(tag_id) or doc.get_element(tag_id) is not None:
            raise ValueError(f"duplicate id {tag_id}")
        if "head" not in t:
            raise ValueError(f"tag {tag_id}: missing head")
        text = str(t.get("text", ""))
        try:
            end_condition = LeaderEndCondition(str(t.get("leader_end_condition", "attached")).lower())
        except ValueError as e:
            raise ValueError(f"tag {tag_id}: {e}") from e
        label = Label(
            label_id=tag_id,
            head_position=_point(t["head"], f"tag {tag_id}"),
            tagged_ids=tuple(str(i) for i in t.get("tagged", [])),
            has_leader=bool(t.get("has_leader", False)),
            leader_end_condition=end_condition,
            leader_end=_point(t["leader_end"], f"tag {tag_id}") if t.get("leader_end") is not None else None,
            leader_elbow=_point(t["leader_elbow"], f"tag {tag_id}") if t.get("leader_elbow") is not None else None,
            text=text,
        )
        if t.get("size") is not None:
            size = _parse_size(t["size"], tag_id)
        else:
            size = tag_box_size_mm(text, text_height, font_family)
        offset = t.get("box_offset", [0.0, 0.0])
        doc.add_tag(
            label,
            size=size,
            box_offset=(float(offset[0]), float(offset[1])),
            visible=bool(t.get("visible", True)),
        )
    return doc


def load_drawing(path: str | Path, repo_root: Path | None = None) -> InMemoryDocument:
    """Read and validate a drawing file."""
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Drawing file not found: {resolved}")
    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Drawing file is not valid JSON: {resolved}: {e}") from e
    return parse_drawing(data)


def _xyz(p) -> list[float] | None:
    return [float(c) for c in p] if p is not None else None


def _location_to_dict(location: Location | None) -> dict | None:
    if isinstance(location, PointLocation):
        return {"type": "point", "xyz": _xyz(location.point)}
    if isinstance(location, CurveLocation):
        return {"type": "curve", "coords": [_xyz(c) for c in location.coords]}
    return None


def drawing_to_dict(doc: InMemoryDocument) -> dict:
    """Current document state in drawing-file shape (sizes always explicit)."""
    hosts = []
    for host_id in doc.host_ids():
        host = doc.get_element(host_id)
        entry: dict[str, Any] = {"id": host.element_id, "category": host.category}
        loc = _location_to_dict(host.location)
        if loc is not None:
            entry["location"] = loc
        hosts.append(entry)
    tags = []
    for tag_id in doc.label_ids():
        rec = doc.tag_record(tag_id)
        label = rec.label
        tags.append({
            "id": label.label_id,
            "text": label.text,
            "head": _xyz(label.head_position),
            "tagged": list(label.tagged_ids),
            "has_leader": label.has_leader,
            "leader_end_condition": label.leader_end_condition.value,
            "leader_end": _xyz(label.leader_end),
            "leader_elbow": _xyz(label.leader_elbow),
            "size": list(rec.size) if rec.size is not None else None,
            "box_offset": list(rec.box_offset),
            "visible": rec.visible,
        })
    return {"units": doc.units, "view": doc.view, "hosts": hosts, "tags": tags}


def save_drawing(doc: InMemoryDocument, path: str | Path) -> Path:
    """Write the document as a drawing file. Returns the path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(drawing_to_dict(doc), indent=2), encoding="utf-8")
    return out
