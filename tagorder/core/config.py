# tagorder/core/config.py
"""
Central configuration for tag arrangement.
All tunable values live here; no magic numbers in other modules.
Lengths are drawing units (mm) unless the name says otherwise.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
DEFAULT_DRAWING_PATH: str = "docs/assets/drawings/sample_plan.json"
REPORTS_DIR: str = "reports"

# ----- Horizontal layout -----
HORIZONTAL_SPACING_MM: float = 80.0
"""Edge-to-edge gap between neighbouring tags in a row."""

HORIZONTAL_MARGIN_MM: float = 20.0
"""Clearance added around each box in overlap-repair mode (row)."""

# ----- Vertical layout -----
VERTICAL_SPACING_MM: float = 150.0
"""Edge-to-edge gap between neighbouring tags in a column."""

VERTICAL_MARGIN_MM: float = 30.0
"""Clearance added around each box in overlap-repair mode (column)."""

# ----- Overlap repair -----
SHIFT_STEP_MM: float = 2.0
"""Distance a candidate is pushed along the axis after each failed overlap test."""

MAX_SHIFT_ATTEMPTS: int = 1000
"""Upper bound on shifts per tag; the last candidate is kept when exhausted."""

# ----- Sorting -----
ANCHOR_ROUND_DECIMALS: int = 3
"""Anchor coordinates are rounded to this many decimals before grouping/comparison."""

# ----- Tolerances -----
GEOMETRY_TOLERANCE: float = 1e-9
"""Below this a box extent is treated as zero (degenerate box)."""

# ----- Text sizing for drawings without explicit tag sizes -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
DEFAULT_TEXT_HEIGHT_MM: float = 2.5
TEXT_PADDING_MM: float = 1.0
"""Padding added on every side of measured text to form the tag box."""

# ----- Rendering -----
RENDER_WIDTH_PX: int = 1000
RENDER_HEIGHT_PX: int = 700
RENDER_PAD_FRAC: float = 0.08

# ----- Transactions -----
TRANSACTION_NAME: str = "Arrange tags"

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""CLI log level. Set env LOG_LEVEL=DEBUG for development."""

SUCCESS_LEVEL: int = 25
"""Numeric level for success messages (between INFO and WARNING)."""
