# tagorder/core/runner.py
"""
CLI entrypoint: load a drawing, arrange its tags, write the arranged drawing,
arrangement.json, run_metadata.json, before.png and after.png.

    python -m tagorder.core.runner --drawing plan.json --origin 0,0 --axis vertical
"""

from __future__ import annotations

import argparse
from pathlib import Path

from tagorder.core.command import ArrangeCommand
from tagorder.core.config import DEFAULT_DRAWING_PATH, LOG_LEVEL, REPORTS_DIR
from tagorder.core.io import load_drawing, save_drawing
from tagorder.core.log import configure_logging
from tagorder.core.render import render_drawing
from tagorder.core.reporting import ensure_report_dir, write_arrangement_json, write_run_metadata_json
from tagorder.core.services import (
    ConsoleConfirmation,
    ConsoleSelection,
    PresetConfirmation,
    PresetSelection,
    parse_point,
)
from tagorder.core.types import ArrangeStatus, LeaderStyle, PlacementConfig, PlacementStrategy, SortAxis

EXIT_CODES = {ArrangeStatus.SUCCEEDED: 0, ArrangeStatus.FAILED: 1, ArrangeStatus.CANCELLED: 2}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Arrange drawing tags into a row or column.")
    p.add_argument("--drawing", type=str, default=DEFAULT_DRAWING_PATH, help="Drawing JSON path (repo-relative)")
    p.add_argument("--origin", type=str, default=None, help="Start point 'x,y' or 'x,y,z'")
    p.add_argument("--tags", type=str, default="", help="Tag ids 'T1,T2' (default: all tags)")
    p.add_argument("--axis", type=str, default=SortAxis.HORIZONTAL.value,
                   choices=[a.value for a in SortAxis], help="Layout axis")
    p.add_argument("--leader", type=str, default=LeaderStyle.STRAIGHT.value,
                   choices=[s.value for s in LeaderStyle], help="Leader style")
    p.add_argument("--strategy", type=str, default=PlacementStrategy.ORIENTED_EDGE.value,
                   choices=[s.value for s in PlacementStrategy], help="Placement strategy")
    p.add_argument("--spacing", type=float, default=None, help="Spacing (drawing units); default per axis")
    p.add_argument("--margin", type=float, default=None, help="Overlap-repair margin; default per axis")
    p.add_argument("--shift-step", type=float, default=None, dest="shift_step", help="Overlap-repair shift step")
    p.add_argument("--max-shifts", type=int, default=None, dest="max_shifts", help="Overlap-repair retry bound")
    p.add_argument("--strict", action="store_true", help="Roll back everything on any per-tag failure")
    p.add_argument("--interactive", action="store_true", help="Prompt for tags, axis, leader style and origin")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--no-render", action="store_true", dest="no_render", help="Skip PNG rendering")
    p.add_argument("--batch-dir", type=str, default=None, dest="batch_dir", help="Batch mode: directory of drawing .json files")
    p.add_argument("--batch-limit", type=int, default=None, dest="batch_limit", help="Max cases in batch")
    p.add_argument("--log-level", type=str, default=LOG_LEVEL, dest="log_level", help="DEBUG, INFO, WARNING, ...")
    p.add_argument("--log-file", type=str, default=None, dest="log_file", help="Append log to this file")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> PlacementConfig:
    """PlacementConfig from CLI flags; unset lengths fall back to the axis defaults."""
    return PlacementConfig.for_axis(
        SortAxis(args.axis),
        leader_style=LeaderStyle(args.leader),
        strategy=PlacementStrategy(args.strategy),
        spacing=args.spacing,
        margin=args.margin,
        shift_step=args.shift_step,
        max_shift_attempts=args.max_shifts,
        strict=args.strict,
    )


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()
    config = build_config(args)

    if args.batch_dir:
        from tagorder.core.batch import run_batch
        if not args.origin:
            raise SystemExit("--origin is required in batch mode")
        batch_dir = Path(args.batch_dir)
        if not batch_dir.is_absolute():
            batch_dir = repo_root / batch_dir
        out = run_batch(
            run_name=args.run_name,
            batch_dir=batch_dir,
            origin=parse_point(args.origin),
            config=config,
            repo_root=repo_root,
            limit=args.batch_limit,
            output_dir=args.output_dir,
            render=not args.no_render,
        )
        print(out / "index.csv")
        return

    doc = load_drawing(args.drawing, repo_root=repo_root)
    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    origin = parse_point(args.origin) if args.origin else None

    if args.interactive:
        selection = ConsoleSelection(doc.label_ids())
        confirmation = ConsoleConfirmation()
    else:
        if origin is None:
            raise SystemExit("--origin is required unless --interactive is given")
        tag_ids = [t.strip() for t in args.tags.split(",") if t.strip()] or doc.label_ids()
        selection = PresetSelection(tag_ids, origin)
        confirmation = PresetConfirmation({SortAxis: config.axis, LeaderStyle: config.leader_style})

    before_path = report_dir / "before.png"
    if not args.no_render:
        render_drawing(doc, before_path, origin=origin)

    outcome = ArrangeCommand(doc, selection, confirmation, base_config=config, view=doc.view).execute()

    paths = []
    if outcome.status is ArrangeStatus.SUCCEEDED:
        paths.append(save_drawing(doc, report_dir / "arranged.json"))
    paths.append(write_arrangement_json(report_dir, outcome, doc))
    paths.append(write_run_metadata_json(report_dir, args.run_name, args.drawing, outcome.origin, outcome.config))
    if not args.no_render:
        after_path = report_dir / "after.png"
        render_drawing(doc, after_path, origin=outcome.origin)
        paths.extend([before_path, after_path])

    for p in paths:
        print(p)
    print("Status:", outcome.status.value, f"({outcome.count} tags)" if outcome.count else outcome.reason or "")
    code = EXIT_CODES[outcome.status]
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
