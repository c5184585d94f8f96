# tagorder/core/text_metrics.py
"""
Measure tag text with Pillow and convert to drawing units (mm).
Only used to size tags in drawing files that give no explicit box size.
"""

from __future__ import annotations

import warnings

from tagorder.core.config import DEFAULT_FONT_FAMILY, TEXT_PADDING_MM

_font_warning_emitted: set[str] = set()

# Fonts are loaded at a fixed size and the measurement is scaled to the text height.
_MEASURE_SIZE_PT = 48


def _load_font(font_family: str):
    """Load PIL ImageFont; fallback with warning if font not found."""
    from PIL import ImageFont

    candidates = [
        font_family + ".ttf",
        font_family.replace(" ", "") + ".ttf",
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
    ]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size=_MEASURE_SIZE_PT)
        except (OSError, IOError):
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default()


def measure_text_mm(text: str, text_height_mm: float, font_family: str = DEFAULT_FONT_FAMILY) -> tuple[float, float]:
    """
    Return (width_mm, height_mm) of text whose cap-to-baseline height is text_height_mm.
    Empty text measures as zero width.
    """
    from PIL import Image, ImageDraw

    if not text:
        return (0.0, float(text_height_mm))
    font = _load_font(font_family)
    draw = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    bbox = draw.textbbox((0, 0), text, font=font)
    w_pt = float(bbox[2] - bbox[0])
    h_pt = float(bbox[3] - bbox[1])
    size_used = float(getattr(font, "size", _MEASURE_SIZE_PT) or _MEASURE_SIZE_PT)
    # Font size maps onto the requested text height.
    ratio = text_height_mm / size_used
    return (w_pt * ratio, max(h_pt * ratio, text_height_mm))


def tag_box_size_mm(text: str, text_height_mm: float, font_family: str = DEFAULT_FONT_FAMILY) -> tuple[float, float]:
    """Box size for a tag: measured text plus padding on every side."""
    w, h = measure_text_mm(text, text_height_mm, font_family)
    return (w + 2 * TEXT_PADDING_MM, h + 2 * TEXT_PADDING_MM)
