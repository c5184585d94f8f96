# tagorder/core/types.py
"""
Dataclasses and enums for tags, anchors, boxes, placement config and results.
Points are (x, y, z) tuples in drawing units; z is carried through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from shapely.geometry import LineString, Polygon, box

from tagorder.core.config import (
    GEOMETRY_TOLERANCE,
    HORIZONTAL_MARGIN_MM,
    HORIZONTAL_SPACING_MM,
    MAX_SHIFT_ATTEMPTS,
    SHIFT_STEP_MM,
    VERTICAL_MARGIN_MM,
    VERTICAL_SPACING_MM,
)


Point3 = tuple[float, float, float]


class SortAxis(Enum):
    """Axis along which tags are laid out; also the primary sort axis."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def index(self) -> int:
        """Coordinate index of the layout axis (0 = x, 1 = y)."""
        return 0 if self is SortAxis.HORIZONTAL else 1

    @property
    def cross_index(self) -> int:
        return 1 - self.index


class LeaderStyle(Enum):
    """Straight: head to anchor. LShape: one elbow, two axis-aligned segments."""
    STRAIGHT = "straight"
    L_SHAPE = "l_shape"


class LeaderEndCondition(Enum):
    ATTACHED = "attached"
    FREE = "free"


class PlacementStrategy(Enum):
    """Oriented-edge spacing (exact edge gaps) or fixed-increment with overlap repair."""
    ORIENTED_EDGE = "oriented_edge"
    OVERLAP_REPAIR = "overlap_repair"


class Region(Enum):
    """Where the anchor set lies on average relative to the origin's Y."""
    ABOVE = "above"
    BELOW = "below"


class Side(Enum):
    """Where the anchor set lies on average relative to the origin's X."""
    LEFT = "left"
    RIGHT = "right"


class GrowthDirection(Enum):
    """Whether successive head positions increase or decrease along the axis."""
    INCREASING = 1
    DECREASING = -1

    @property
    def sign(self) -> int:
        return self.value


class ArrangeStatus(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class BBox:
    """Axis-aligned box in the drawing plane."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def degenerate_at(cls, point: Point3) -> "BBox":
        """Zero-size box sitting on a point; never collides."""
        return cls(point[0], point[1], point[0], point[1])

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    @property
    def is_degenerate(self) -> bool:
        return self.width <= GEOMETRY_TOLERANCE or self.height <= GEOMETRY_TOLERANCE

    def low(self, axis: SortAxis) -> float:
        """Lower edge along axis (min_x or min_y)."""
        return self.min_x if axis is SortAxis.HORIZONTAL else self.min_y

    def high(self, axis: SortAxis) -> float:
        """Upper edge along axis (max_x or max_y)."""
        return self.max_x if axis is SortAxis.HORIZONTAL else self.max_y

    def translated(self, dx: float, dy: float) -> "BBox":
        return BBox(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)

    def expanded(self, margin: float) -> "BBox":
        """Grow on every side by margin. Degenerate boxes stay degenerate."""
        if margin <= 0 or self.is_degenerate:
            return self
        return BBox(self.min_x - margin, self.min_y - margin, self.max_x + margin, self.max_y + margin)

    def to_polygon(self) -> Polygon:
        """Shapely polygon for collision tests; empty for degenerate boxes."""
        if self.is_degenerate:
            return Polygon()
        return box(self.min_x, self.min_y, self.max_x, self.max_y)

    def as_list(self) -> list[float]:
        return [self.min_x, self.min_y, self.max_x, self.max_y]


@dataclass(frozen=True)
class PointLocation:
    """Host element located at a single point (e.g. a door, a column)."""
    point: Point3

    @property
    def reference_point(self) -> Point3:
        return self.point


@dataclass(frozen=True)
class CurveLocation:
    """Host element located along a curve (e.g. a wall). The start point represents it."""
    coords: tuple[Point3, ...]

    def __post_init__(self) -> None:
        if len(self.coords) < 2:
            raise ValueError("Curve location needs at least 2 points")

    @property
    def reference_point(self) -> Point3:
        return self.coords[0]

    def as_linestring(self) -> LineString:
        return LineString([(c[0], c[1]) for c in self.coords])


Location = PointLocation | CurveLocation


@dataclass(frozen=True)
class HostElement:
    """A tagged model element; location may be missing (e.g. sketch-based elements)."""
    element_id: str
    category: str = ""
    location: Location | None = None


@dataclass(frozen=True)
class Label:
    """
    Snapshot of a tag as read from the document.
    bounding_box is not stored here: it is always queried at the current head.
    """
    label_id: str
    head_position: Point3
    tagged_ids: tuple[str, ...] = ()
    has_leader: bool = False
    leader_end_condition: LeaderEndCondition = LeaderEndCondition.ATTACHED
    leader_end: Point3 | None = None
    leader_elbow: Point3 | None = None
    text: str = ""


@dataclass(frozen=True)
class ResolvedLabel:
    """A label paired with its resolved anchor point. Index is the input order."""
    label: Label
    anchor: Point3
    index: int


@dataclass(frozen=True)
class PlacementConfig:
    """
    Arrangement settings. max_shift_attempts bounds the overlap-repair loop.
    strict=True turns any per-label failure into a rollback of the whole batch.
    """
    axis: SortAxis = SortAxis.HORIZONTAL
    leader_style: LeaderStyle = LeaderStyle.STRAIGHT
    strategy: PlacementStrategy = PlacementStrategy.ORIENTED_EDGE
    spacing: float = HORIZONTAL_SPACING_MM
    margin: float = HORIZONTAL_MARGIN_MM
    shift_step: float = SHIFT_STEP_MM
    max_shift_attempts: int = MAX_SHIFT_ATTEMPTS
    strict: bool = False

    def __post_init__(self) -> None:
        if self.spacing < 0:
            raise ValueError(f"spacing must be >= 0, got {self.spacing}")
        if self.margin < 0:
            raise ValueError(f"margin must be >= 0, got {self.margin}")
        if self.shift_step <= 0:
            raise ValueError(f"shift_step must be > 0, got {self.shift_step}")
        if self.max_shift_attempts < 1:
            raise ValueError(f"max_shift_attempts must be >= 1, got {self.max_shift_attempts}")

    @classmethod
    def for_axis(cls, axis: SortAxis, **overrides) -> "PlacementConfig":
        """Config with the default spacing/margin of the given axis; keyword overrides win."""
        defaults = _axis_lengths(axis)
        defaults.update({k: v for k, v in overrides.items() if v is not None})
        return cls(axis=axis, **defaults)

    def with_axis(self, axis: SortAxis, **overrides) -> "PlacementConfig":
        """
        Same config on another axis. Spacing and margin still at the old
        axis's defaults switch to the new axis's defaults; values set by
        hand are kept. Keyword overrides win.
        """
        changes = {"axis": axis}
        if axis is not self.axis:
            old, new = _axis_lengths(self.axis), _axis_lengths(axis)
            for name, value in old.items():
                if getattr(self, name) == value:
                    changes[name] = new[name]
        changes.update(overrides)
        return replace(self, **changes)


def _axis_lengths(axis: SortAxis) -> dict[str, float]:
    if axis is SortAxis.HORIZONTAL:
        return {"spacing": HORIZONTAL_SPACING_MM, "margin": HORIZONTAL_MARGIN_MM}
    return {"spacing": VERTICAL_SPACING_MM, "margin": VERTICAL_MARGIN_MM}


@dataclass(frozen=True)
class SortPlan:
    """Visiting order plus the coarse classification that drives growth direction."""
    ordered: list[ResolvedLabel]
    axis: SortAxis
    direction: GrowthDirection
    region: Region | None = None
    side: Side | None = None

    @property
    def labels(self) -> list[Label]:
        return [r.label for r in self.ordered]


@dataclass
class LabelIssue:
    """A per-label, non-fatal problem. Only visible in the log and the report."""
    label_id: str
    error_key: str
    message: str


@dataclass
class Placement:
    """Target head position and the box the tag will occupy there."""
    label: Label
    anchor: Point3
    head: Point3
    bbox: BBox
    attempts: int = 0


@dataclass
class PlacementOutcome:
    placements: list[Placement] = field(default_factory=list)
    issues: list[LabelIssue] = field(default_factory=list)


@dataclass
class ArrangeReport:
    """What arrange() did: placed tags (before/after heads), skipped tags and issues."""
    placed: list[Placement] = field(default_factory=list)
    before: dict[str, Point3] = field(default_factory=dict)
    issues: list[LabelIssue] = field(default_factory=list)
    plan: SortPlan | None = None
    reconnected: int = 0

    @property
    def count(self) -> int:
        return len(self.placed)


@dataclass
class ArrangeOutcome:
    """Final status reported to the caller of the arrange command."""
    status: ArrangeStatus
    count: int = 0
    reason: str | None = None
    error_key: str | None = None
    report: ArrangeReport | None = None
    config: PlacementConfig | None = None
    origin: Point3 | None = None
