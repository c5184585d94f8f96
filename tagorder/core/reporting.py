# tagorder/core/reporting.py
"""
Create reports/<run_name>/ and write arrangement.json, run_metadata.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from tagorder.core import error_codes
from tagorder.core.config import (
    ANCHOR_ROUND_DECIMALS,
    HORIZONTAL_MARGIN_MM,
    HORIZONTAL_SPACING_MM,
    MAX_SHIFT_ATTEMPTS,
    REPORTS_DIR,
    SHIFT_STEP_MM,
    VERTICAL_MARGIN_MM,
    VERTICAL_SPACING_MM,
)
from tagorder.core.interfaces import DocumentStore
from tagorder.core.types import ArrangeOutcome, PlacementConfig, Point3
from tagorder.core.validate import check_arrangement

SCHEMA_VERSION = "1.0"


def _xy(p: Point3 | None) -> dict | None:
    if p is None:
        return None
    return {"x": float(p[0]), "y": float(p[1]), "z": float(p[2])}


def config_to_dict(config: PlacementConfig) -> dict:
    return {
        "axis": config.axis.value,
        "leader_style": config.leader_style.value,
        "strategy": config.strategy.value,
        "spacing": config.spacing,
        "margin": config.margin,
        "shift_step": config.shift_step,
        "max_shift_attempts": config.max_shift_attempts,
        "strict": config.strict,
    }


def arrangement_to_dict(outcome: ArrangeOutcome, document: DocumentStore | None = None) -> dict:
    """Structure for arrangement.json. Leader state is read back from document when given."""
    report = outcome.report
    tags = []
    if report is not None:
        for p in report.placed:
            label_id = p.label.label_id
            entry = {
                "id": label_id,
                "head_before": _xy(report.before.get(label_id)),
                "head_after": _xy(p.head),
                "anchor": _xy(p.anchor),
                "bbox": p.bbox.as_list(),
                "shift_attempts": p.attempts,
            }
            current = document.get_label(label_id) if document is not None else None
            if current is not None and current.has_leader:
                entry["leader"] = {
                    "end_condition": current.leader_end_condition.value,
                    "end": _xy(current.leader_end),
                    "elbow": _xy(current.leader_elbow),
                }
            tags.append(entry)

    out: dict = {
        "schema_version": SCHEMA_VERSION,
        "status": outcome.status.value,
        "count": outcome.count,
        "reason": outcome.reason,
        "error_key": outcome.error_key,
        "origin": _xy(outcome.origin),
        "config": config_to_dict(outcome.config) if outcome.config is not None else None,
        "plan": None,
        "tags": tags,
        "issues": [],
        "checks": None,
    }
    if report is not None:
        if report.plan is not None:
            out["plan"] = {
                "order": [r.label.label_id for r in report.plan.ordered],
                "direction": report.plan.direction.name.lower(),
                "region": report.plan.region.value if report.plan.region else None,
                "side": report.plan.side.value if report.plan.side else None,
            }
        out["issues"] = [
            {"id": i.label_id, "error_key": i.error_key, "message": i.message,
             "hint": error_codes.user_message(i.error_key, fallback="")}
            for i in report.issues
        ]
        out["leaders_reconnected"] = report.reconnected
        if outcome.config is not None:
            out["checks"] = check_arrangement(report.placed, outcome.config)
    return out


def run_metadata_dict(
    run_name: str,
    drawing_path: str,
    origin: Point3 | None,
    config: PlacementConfig | None,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "drawing_path": drawing_path,
        "origin": _xy(origin),
        "placement": config_to_dict(config) if config is not None else None,
        "config": {
            "HORIZONTAL_SPACING_MM": HORIZONTAL_SPACING_MM,
            "HORIZONTAL_MARGIN_MM": HORIZONTAL_MARGIN_MM,
            "VERTICAL_SPACING_MM": VERTICAL_SPACING_MM,
            "VERTICAL_MARGIN_MM": VERTICAL_MARGIN_MM,
            "SHIFT_STEP_MM": SHIFT_STEP_MM,
            "MAX_SHIFT_ATTEMPTS": MAX_SHIFT_ATTEMPTS,
            "ANCHOR_ROUND_DECIMALS": ANCHOR_ROUND_DECIMALS,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_arrangement_json(
    report_dir: Path,
    outcome: ArrangeOutcome,
    document: DocumentStore | None = None,
) -> Path:
    """Write arrangement.json to report_dir. Returns path to file."""
    path = report_dir / "arrangement.json"
    path.write_text(json.dumps(arrangement_to_dict(outcome, document), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    drawing_path: str,
    origin: Point3 | None,
    config: PlacementConfig | None,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, drawing_path, origin, config)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
