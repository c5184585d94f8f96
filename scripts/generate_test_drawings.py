#!/usr/bin/env python3
"""
Generate diverse drawing JSON files for testing tagorder batch mode.

Categories:
1-10:   Door tags scattered above a wall (point hosts)
11-20:  Wall tags along a corridor (curve hosts, off-centre boxes)
21-30:  Mixed hosts on both sides of the origin, some without leaders
31-35:  Edge cases (hidden tags, host without location, duplicate anchors)
36-40:  Stress tests (many tags, tiny and huge boxes)

Usage:
    python scripts/generate_test_drawings.py
    python -m tagorder.core.runner --batch-dir docs/assets/test_drawings --origin 0,0
"""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np

OUTPUT_DIR = Path(__file__).parent.parent / "docs" / "assets" / "test_drawings"
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

SEED = 42


def save_drawing(filename: str, hosts: list[dict], tags: list[dict]) -> None:
    path = OUTPUT_DIR / filename
    data = {"units": "mm", "view": "Level 1", "text_height_mm": 2.5, "hosts": hosts, "tags": tags}
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    print(f"Created: {path.name}")


def point_host(host_id: str, x: float, y: float, category: str = "Doors") -> dict:
    return {"id": host_id, "category": category, "location": {"type": "point", "xyz": [round(x, 3), round(y, 3), 0.0]}}


def curve_host(host_id: str, start: tuple[float, float], end: tuple[float, float]) -> dict:
    return {
        "id": host_id,
        "category": "Walls",
        "location": {"type": "curve", "coords": [[round(start[0], 3), round(start[1], 3)], [round(end[0], 3), round(end[1], 3)]]},
    }


def tag(
    tag_id: str,
    host_id: str,
    head: tuple[float, float],
    size: tuple[float, float] | None,
    offset: tuple[float, float] = (0.0, 0.0),
    has_leader: bool = True,
    visible: bool = True,
) -> dict:
    out = {
        "id": tag_id,
        "text": host_id,
        "head": [round(head[0], 3), round(head[1], 3)],
        "tagged": [host_id],
        "has_leader": has_leader,
        "box_offset": [round(offset[0], 3), round(offset[1], 3)],
        "visible": visible,
    }
    if size is not None:
        out["size"] = [round(size[0], 3), round(size[1], 3)]
    return out


def doors_above(rng: np.random.Generator, n: int) -> tuple[list[dict], list[dict]]:
    hosts, tags = [], []
    for i in range(n):
        x, y = rng.uniform(-2000, 2000), rng.uniform(200, 1500)
        hosts.append(point_host(f"D{i}", x, y))
        tags.append(tag(f"T{i}", f"D{i}", (x + rng.normal(0, 80), y + rng.uniform(50, 200)), (rng.uniform(15, 45), 6.0)))
    return hosts, tags


def walls_corridor(rng: np.random.Generator, n: int) -> tuple[list[dict], list[dict]]:
    hosts, tags = [], []
    for i in range(n):
        x0 = rng.uniform(-3000, 3000)
        y0 = rng.choice([-400.0, 400.0])
        hosts.append(curve_host(f"W{i}", (x0, y0), (x0 + rng.uniform(500, 3000), y0)))
        size = (rng.uniform(20, 60), rng.uniform(5, 9))
        offset = (size[0] / 2.0, 0.0)
        tags.append(tag(f"T{i}", f"W{i}", (x0 + 100, y0 + 120), size, offset))
    return hosts, tags


def mixed(rng: np.random.Generator, n: int) -> tuple[list[dict], list[dict]]:
    hosts, tags = [], []
    for i in range(n):
        x, y = rng.uniform(-1500, 1500), rng.uniform(-1500, 1500)
        if rng.random() < 0.5:
            hosts.append(point_host(f"E{i}", x, y, "Equipment"))
        else:
            hosts.append(curve_host(f"E{i}", (x, y), (x, y + rng.uniform(300, 900))))
        size = None if rng.random() < 0.3 else (rng.uniform(10, 50), 6.0)
        tags.append(tag(f"T{i}", f"E{i}", (x + 60, y + 60), size, has_leader=bool(rng.random() < 0.7)))
    return hosts, tags


def edge_case(rng: np.random.Generator, n: int) -> tuple[list[dict], list[dict]]:
    hosts, tags = doors_above(rng, n)
    tags[0]["visible"] = False
    hosts.append({"id": "SKETCH", "category": "Sketch"})
    tags.append(tag("T_sketch", "SKETCH", (0.0, 0.0), (20.0, 6.0)))
    # two tags on the same anchor
    tags.append(tag("T_dup", hosts[1]["id"], (0.0, 900.0), (25.0, 6.0)))
    return hosts, tags


def stress(rng: np.random.Generator, n: int) -> tuple[list[dict], list[dict]]:
    hosts, tags = [], []
    for i in range(n):
        x, y = rng.uniform(-10000, 10000), rng.uniform(-10000, 10000)
        hosts.append(point_host(f"P{i}", x, y, "Columns"))
        w = float(rng.choice([0.5, 5.0, 40.0, 400.0]))
        tags.append(tag(f"T{i}", f"P{i}", (x, y + 100), (w, max(1.0, w / 6.0))))
    return hosts, tags


def main() -> None:
    rng = np.random.default_rng(SEED)
    n_case = 0
    for builder, count, sizes in (
        (doors_above, 10, (3, 12)),
        (walls_corridor, 10, (3, 10)),
        (mixed, 10, (4, 16)),
        (edge_case, 5, (3, 6)),
        (stress, 5, (80, 200)),
    ):
        for _ in range(count):
            n_case += 1
            n = int(rng.integers(sizes[0], sizes[1] + 1))
            hosts, tags = builder(rng, n)
            save_drawing(f"drawing_{n_case:03d}_{builder.__name__}.json", hosts, tags)
    print(f"\nGenerated {n_case} drawings in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
