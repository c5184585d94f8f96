# tagorder/core/validate.py
"""
Invariant checks on an arrangement: pairwise box overlaps (optionally margin-
expanded) and edge-to-edge gaps between consecutive tags along the axis.
"""

from __future__ import annotations

from tagorder.core.geometry import boxes_overlap
from tagorder.core.types import BBox, Placement, PlacementConfig, PlacementStrategy, SortAxis


def find_overlaps(boxes: list[BBox], margin: float = 0.0, touching: bool = True) -> list[tuple[int, int]]:
    """Index pairs (i < j) whose margin-expanded boxes overlap (or touch, unless touching=False)."""
    expanded = [b.expanded(margin) for b in boxes]
    pairs: list[tuple[int, int]] = []
    for i in range(len(expanded)):
        for j in range(i + 1, len(expanded)):
            if boxes_overlap(expanded[i], expanded[j], touching=touching):
                pairs.append((i, j))
    return pairs


def edge_gap(a: BBox, b: BBox, axis: SortAxis) -> float:
    """Signed gap between two boxes along axis; negative means they overlap on that axis."""
    return max(b.low(axis) - a.high(axis), a.low(axis) - b.high(axis))


def edge_gaps(boxes: list[BBox], axis: SortAxis) -> list[float]:
    """Gaps between consecutive boxes, in sequence order."""
    return [edge_gap(boxes[i], boxes[i + 1], axis) for i in range(len(boxes) - 1)]


def check_arrangement(placements: list[Placement], config: PlacementConfig) -> dict:
    """Summary for reports: overlaps found and the spread of edge gaps."""
    boxes = [p.bbox for p in placements]
    if config.strategy is PlacementStrategy.OVERLAP_REPAIR:
        overlaps = find_overlaps(boxes, margin=config.margin)
    else:
        # edge-to-edge runs with spacing 0 touch by construction
        overlaps = find_overlaps(boxes, touching=False)
    gaps = edge_gaps(boxes, config.axis)
    return {
        "overlaps_detected": len(overlaps),
        "overlap_pairs": [[placements[i].label.label_id, placements[j].label.label_id] for i, j in overlaps],
        "min_edge_gap": min(gaps) if gaps else None,
        "max_edge_gap": max(gaps) if gaps else None,
    }
