# tagorder/core/batch.py
"""
Multi-drawing batch mode: arrange every tag of each drawing .json in a directory.
Output: reports/batch_<run_name>/index.csv and cases/<case_id>/ with the
arranged drawing, arrangement.json and images.
"""

from __future__ import annotations

import csv
import logging
import time
from pathlib import Path

from tagorder.core.command import ArrangeCommand
from tagorder.core.config import REPORTS_DIR
from tagorder.core.io import load_drawing, save_drawing
from tagorder.core.render import render_drawing
from tagorder.core.reporting import (
    arrangement_to_dict,
    ensure_report_dir,
    write_arrangement_json,
    write_run_metadata_json,
)
from tagorder.core.services import PresetConfirmation, PresetSelection
from tagorder.core.types import ArrangeStatus, LeaderStyle, PlacementConfig, Point3, SortAxis

logger = logging.getLogger(__name__)

INDEX_FIELDS = [
    "case_id", "drawing_source", "status", "count", "n_tags",
    "issues_count", "overlaps_detected", "duration_ms",
]


def _error_row(case_id: str, source: str, t0: float) -> dict:
    return {
        "case_id": case_id, "drawing_source": source, "status": "error", "count": 0,
        "n_tags": 0, "issues_count": "", "overlaps_detected": "",
        "duration_ms": int((time.perf_counter() - t0) * 1000),
    }


def run_batch(
    run_name: str,
    batch_dir: Path,
    origin: Point3,
    config: PlacementConfig,
    repo_root: Path | None = None,
    limit: int | None = None,
    output_dir: str = REPORTS_DIR,
    render: bool = True,
) -> Path:
    """
    Arrange all tags of every drawing in batch_dir around the same origin.
    Returns report directory containing index.csv and cases/<case_id>/.
    """
    if not batch_dir.is_dir():
        raise ValueError(f"Batch directory not found: {batch_dir}")
    root = repo_root or Path.cwd().resolve()
    out_dir = ensure_report_dir(root, f"batch_{run_name}", output_dir=output_dir)
    cases_dir = out_dir / "cases"
    cases_dir.mkdir(parents=True, exist_ok=True)
    files = sorted(batch_dir.glob("*.json"))
    if limit:
        files = files[:limit]

    rows: list[dict] = []
    for i, path in enumerate(files):
        case_id = f"case_{i:04d}_{path.stem}"
        case_dir = cases_dir / case_id
        case_dir.mkdir(parents=True, exist_ok=True)
        source = str(path.relative_to(root)) if root in path.parents else str(path)
        t0 = time.perf_counter()
        try:
            doc = load_drawing(path)
        except (OSError, ValueError) as e:
            logger.warning("Skipping %s: %s", source, e)
            rows.append(_error_row(case_id, source, t0))
            continue

        if render:
            render_drawing(doc, case_dir / "before.png", origin=origin)
        tag_ids = doc.label_ids()
        command = ArrangeCommand(
            doc,
            PresetSelection(tag_ids, origin),
            PresetConfirmation({SortAxis: config.axis, LeaderStyle: config.leader_style}),
            base_config=config,
            view=doc.view,
        )
        outcome = command.execute()
        duration_ms = int((time.perf_counter() - t0) * 1000)

        if outcome.status is ArrangeStatus.SUCCEEDED:
            save_drawing(doc, case_dir / "arranged.json")
        write_arrangement_json(case_dir, outcome, doc)
        write_run_metadata_json(case_dir, run_name, source, origin, config)
        if render:
            render_drawing(doc, case_dir / "after.png", origin=origin)

        summary = arrangement_to_dict(outcome)
        checks = summary.get("checks") or {}
        rows.append({
            "case_id": case_id, "drawing_source": source, "status": outcome.status.value,
            "count": outcome.count, "n_tags": len(tag_ids),
            "issues_count": len(summary["issues"]),
            "overlaps_detected": checks.get("overlaps_detected", ""),
            "duration_ms": duration_ms,
        })
        logger.info("%s: %s (%d/%d tags)", case_id, outcome.status.value, outcome.count, len(tag_ids))

    index_path = out_dir / "index.csv"
    with open(index_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=INDEX_FIELDS)
        w.writeheader()
        w.writerows(rows)
    return out_dir
