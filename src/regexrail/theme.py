"""Dark theme styling for railroad SVG output."""
from __future__ import annotations

from typing import Tuple

from .resources import load_theme_template

# (exclusive upper bound on min(width, height), font size in px)
FONT_SIZE_BUCKETS: Tuple[Tuple[int, int], ...] = (
    (300, 8),
    (500, 10),
    (800, 12),
)
LARGEST_FONT_SIZE = 14

REFERENCE_FONT_SIZE = 12
REFERENCE_STROKE_WIDTH = 1.5


def font_size_for(width: int, height: int) -> int:
    smaller = min(width, height)
    for bound, size in FONT_SIZE_BUCKETS:
        if smaller < bound:
            return size
    return LARGEST_FONT_SIZE


def stroke_width_for(font_size: int) -> float:
    return REFERENCE_STROKE_WIDTH * (font_size / REFERENCE_FONT_SIZE)


def theme_css(width: int, height: int) -> str:
    font_size = font_size_for(width, height)
    stroke_width = stroke_width_for(font_size)
    return load_theme_template().substitute(
        font_size=font_size,
        stroke_width=_fmt(stroke_width),
    )


def apply_theme(svg_text: str, width: int, height: int, dark_theme: bool = True) -> str:
    """Inject the dark stylesheet right after the first tag of ``svg_text``.

    Markup without any ``>`` is returned untouched.
    """
    if not dark_theme:
        return svg_text
    insert_at = svg_text.find(">")
    if insert_at == -1:
        return svg_text
    return svg_text[: insert_at + 1] + theme_css(width, height) + svg_text[insert_at + 1 :]


def _fmt(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


__all__ = ["apply_theme", "font_size_for", "stroke_width_for", "theme_css"]
