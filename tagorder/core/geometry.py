# tagorder/core/geometry.py
"""
Geometry helpers: point arithmetic on (x, y, z) tuples, box collision tests
via shapely, aggregate anchor statistics via numpy.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from tagorder.core.config import ANCHOR_ROUND_DECIMALS
from tagorder.core.types import BBox, Point3, SortAxis


def as_point3(value: Iterable[float]) -> Point3:
    """Coerce a 2- or 3-sequence to a float (x, y, z) tuple; z defaults to 0."""
    coords = [float(v) for v in value]
    if len(coords) == 2:
        coords.append(0.0)
    if len(coords) != 3:
        raise ValueError(f"Expected 2 or 3 coordinates, got {len(coords)}")
    return (coords[0], coords[1], coords[2])


def with_axis_value(point: Point3, axis: SortAxis, value: float) -> Point3:
    """Return point with its coordinate on axis replaced."""
    if axis is SortAxis.HORIZONTAL:
        return (float(value), point[1], point[2])
    return (point[0], float(value), point[2])


def axis_value(point: Point3, axis: SortAxis) -> float:
    return point[axis.index]


def delta_2d(src: Point3, dst: Point3) -> tuple[float, float]:
    """In-plane translation taking src onto dst."""
    return (dst[0] - src[0], dst[1] - src[1])


def distance_2d(a: Point3, b: Point3) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def round_coord(value: float, decimals: int = ANCHOR_ROUND_DECIMALS) -> float:
    """Round for grouping; -0.0 is normalized to 0.0 so equal keys compare equal."""
    r = round(float(value), decimals)
    return 0.0 if r == 0 else r


def mean_xy(points: list[Point3]) -> tuple[float, float]:
    """Mean (x, y) of a non-empty point list."""
    if not points:
        raise ValueError("mean_xy needs at least one point")
    xy = np.array([(p[0], p[1]) for p in points], dtype=float)
    m = np.mean(xy, axis=0)
    return (float(m[0]), float(m[1]))


def bbox_from_bounds(bounds: tuple[float, float, float, float]) -> BBox:
    """BBox from shapely-style (minx, miny, maxx, maxy)."""
    minx, miny, maxx, maxy = bounds
    return BBox(min(minx, maxx), min(miny, maxy), max(minx, maxx), max(miny, maxy))


def boxes_overlap(a: BBox, b: BBox, touching: bool = True) -> bool:
    """
    True if the boxes share any point. With touching=False, boxes that only
    share an edge or a corner do not count.
    Degenerate boxes never collide.
    """
    if a.is_degenerate or b.is_degenerate:
        return False
    pa, pb = a.to_polygon(), b.to_polygon()
    if touching:
        return pa.intersects(pb)
    return pa.intersects(pb) and not pa.touches(pb)


def occupied_geometry(boxes: Iterable[BBox]) -> BaseGeometry:
    """Union of all non-degenerate boxes; empty polygon if none."""
    polys = [b.to_polygon() for b in boxes if not b.is_degenerate]
    if not polys:
        return Polygon()
    return unary_union(polys)


def collides_with(candidate: BBox, occupied: BaseGeometry | None) -> bool:
    """True if candidate touches or enters the occupied geometry."""
    if occupied is None or occupied.is_empty or candidate.is_degenerate:
        return False
    return candidate.to_polygon().intersects(occupied)
