# tagorder/core/render.py
"""
Matplotlib PNG rendering of a drawing: host elements, tag boxes, leaders,
and the start point. Used for before.png / after.png.
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from tagorder.core.anchors import AnchorResolver
from tagorder.core.config import RENDER_HEIGHT_PX, RENDER_PAD_FRAC, RENDER_WIDTH_PX
from tagorder.core.document import InMemoryDocument
from tagorder.core.geometry import bbox_from_bounds, occupied_geometry
from tagorder.core.leaders import leader_path
from tagorder.core.types import BBox, CurveLocation, Point3, PointLocation


def _new_fig(width_px: int, height_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / 100.0, height_px / 100.0),
        dpi=100,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])
    ax.axis("off")
    return fig, ax


def _drawing_extent(doc: InMemoryDocument, origin: Point3 | None) -> tuple[float, float, float, float] | None:
    """(minx, miny, maxx, maxy) over tag boxes, heads, host locations and origin."""
    pts: list[tuple[float, float]] = []
    for tag_id in doc.label_ids():
        label = doc.get_label(tag_id)
        pts.append((label.head_position[0], label.head_position[1]))
        if label.leader_end is not None:
            pts.append((label.leader_end[0], label.leader_end[1]))
    for host_id in doc.host_ids():
        loc = doc.get_element(host_id).location
        if isinstance(loc, PointLocation):
            pts.append((loc.point[0], loc.point[1]))
        elif isinstance(loc, CurveLocation):
            pts.extend(loc.as_linestring().coords)
    if origin is not None:
        pts.append((origin[0], origin[1]))
    boxes = occupied_geometry(b for b in (doc.bounding_box(t) for t in doc.label_ids()) if b is not None)
    if not boxes.is_empty:
        hull = bbox_from_bounds(boxes.bounds)
        pts.extend([(hull.min_x, hull.min_y), (hull.max_x, hull.max_y)])
    if not pts:
        return None
    xy = np.array(pts, dtype=float)
    return (float(xy[:, 0].min()), float(xy[:, 1].min()), float(xy[:, 0].max()), float(xy[:, 1].max()))


def _set_axes(ax: plt.Axes, extent: tuple[float, float, float, float] | None, pad_frac: float) -> None:
    if extent is None:
        return
    minx, miny, maxx, maxy = extent
    dx = max(1.0, (maxx - minx) * pad_frac)
    dy = max(1.0, (maxy - miny) * pad_frac)
    ax.set_xlim(minx - dx, maxx + dx)
    ax.set_ylim(miny - dy, maxy + dy)
    ax.set_aspect("equal", adjustable="datalim")


def _draw_hosts(ax: plt.Axes, doc: InMemoryDocument) -> None:
    for host_id in doc.host_ids():
        loc = doc.get_element(host_id).location
        if isinstance(loc, CurveLocation):
            xy = np.array(loc.as_linestring().coords)
            ax.plot(xy[:, 0], xy[:, 1], color="dimgray", linewidth=2, zorder=1)
            ax.plot(xy[0, 0], xy[0, 1], marker="o", color="dimgray", markersize=4, zorder=2)
        elif isinstance(loc, PointLocation):
            ax.plot(loc.point[0], loc.point[1], marker="s", color="dimgray", markersize=5, zorder=2)


def _draw_tag(ax: plt.Axes, doc: InMemoryDocument, resolver: AnchorResolver, tag_id: str) -> None:
    label = doc.get_label(tag_id)
    box: BBox | None = doc.bounding_box(tag_id)
    if label.has_leader:
        end = label.leader_end or resolver.resolve(label)
        if end is not None:
            path = leader_path(label.head_position, end, label.leader_elbow)
            xy = np.array(path.coords)
            ax.plot(xy[:, 0], xy[:, 1], color="darkorange", linewidth=0.8, zorder=3)
    if box is not None and not box.is_degenerate:
        ax.add_patch(Rectangle(
            (box.min_x, box.min_y), box.width, box.height,
            facecolor="white", edgecolor="navy", linewidth=0.8, zorder=4,
        ))
        cx, cy = box.center
        ax.text(cx, cy, label.text or tag_id, ha="center", va="center", fontsize=6, color="navy", zorder=5)
    ax.plot(label.head_position[0], label.head_position[1], marker="+", color="crimson", markersize=4, zorder=6)


def render_drawing(
    doc: InMemoryDocument,
    output_path: str | Path,
    origin: Point3 | None = None,
    width_px: int = RENDER_WIDTH_PX,
    height_px: int = RENDER_HEIGHT_PX,
    pad_frac: float = RENDER_PAD_FRAC,
) -> None:
    """Render hosts, tags, leaders and (optionally) the start point to PNG."""
    fig, ax = _new_fig(width_px, height_px)
    resolver = AnchorResolver(doc)
    _draw_hosts(ax, doc)
    for tag_id in doc.label_ids():
        _draw_tag(ax, doc, resolver, tag_id)
    if origin is not None:
        ax.plot(origin[0], origin[1], marker="x", color="green", markersize=8, zorder=7)
    _set_axes(ax, _drawing_extent(doc, origin), pad_frac)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white")
    plt.close(fig)
