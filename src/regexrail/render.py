"""Rasterize railroad diagrams to trimmed, transport-ready PNG payloads."""
from __future__ import annotations

import base64
import io
import json
import sys
from dataclasses import dataclass
from typing import Sequence, Tuple

import cairosvg
from PIL import Image

from .components import Component
from .diagram import components_to_diagram, diagram_to_svg
from .theme import apply_theme

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600

MIN_MARGIN_V = 10
MIN_MARGIN_H = 5
MARGIN_V_RATIO = 0.05
MARGIN_H_RATIO = 0.02


@dataclass(frozen=True)
class RenderOptions:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    dark_theme: bool = True


@dataclass(frozen=True)
class RenderResult:
    base64: str
    width: int
    height: int

    @classmethod
    def from_png(cls, png_bytes: bytes) -> "RenderResult":
        width, height = png_size(png_bytes)
        return cls(
            base64=base64.b64encode(png_bytes).decode("ascii"),
            width=width,
            height=height,
        )

    def to_dict(self) -> dict:
        return {"base64": self.base64, "width": self.width, "height": self.height}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def png_size(png_bytes: bytes) -> Tuple[int, int]:
    with Image.open(io.BytesIO(png_bytes)) as img:
        return img.width, img.height


def render_svg(components: Sequence[Component], options: RenderOptions) -> str:
    svg_text = diagram_to_svg(components_to_diagram(components))
    return apply_theme(svg_text, options.width, options.height, options.dark_theme)


def rasterize(svg_text: str, width: int, height: int) -> bytes:
    return cairosvg.svg2png(
        bytestring=svg_text.encode("utf-8"),
        output_width=width,
        output_height=height,
        background_color=None,
    )


def content_margins(bbox: Tuple[int, int, int, int]) -> Tuple[int, int]:
    """Return ``(horizontal, vertical)`` padding for a content bounding box."""
    left, top, right, bottom = bbox
    margin_h = max(MIN_MARGIN_H, int((right - left) * MARGIN_H_RATIO))
    margin_v = max(MIN_MARGIN_V, int((bottom - top) * MARGIN_V_RATIO))
    return margin_h, margin_v


def trim_image(png_bytes: bytes) -> bytes:
    """Crop transparent padding, keeping a small margin around the content.

    Never raises: undecodable input comes back unchanged, as does an image with
    no visible pixels.
    """
    try:
        img = Image.open(io.BytesIO(png_bytes))
        if img.mode != "RGBA":
            img = img.convert("RGBA")

        # alpha only, so opaque black pixels still count as content
        bbox = img.getchannel("A").getbbox()
        if bbox is None:
            return png_bytes

        margin_h, margin_v = content_margins(bbox)
        left, top, right, bottom = bbox
        crop_box = (
            max(0, left - margin_h),
            max(0, top - margin_v),
            min(img.width, right + margin_h),
            min(img.height, bottom + margin_v),
        )

        output = io.BytesIO()
        img.crop(crop_box).save(output, format="PNG")
        return output.getvalue()
    except Exception:
        return png_bytes


def blank_png(width: int, height: int) -> bytes:
    img = Image.new("RGBA", (width, height), color=(0, 0, 0, 0))
    output = io.BytesIO()
    img.save(output, format="PNG")
    return output.getvalue()


def render_png(components: Sequence[Component], options: RenderOptions) -> bytes:
    svg_text = render_svg(components, options)
    png_bytes = rasterize(svg_text, options.width, options.height)
    return trim_image(png_bytes)


def render_components(
    components: Sequence[Component], options: RenderOptions = RenderOptions()
) -> RenderResult:
    """Render ``components`` to a PNG result, falling back to a blank image.

    Any failure while building, theming, rasterizing or measuring the diagram is
    reported on stderr and replaced by a transparent PNG of the requested size.
    """
    try:
        return RenderResult.from_png(render_png(components, options))
    except Exception as exc:
        sys.stderr.write(f"error generating diagram: {exc}\n")
        placeholder = blank_png(options.width, options.height)
        return RenderResult(
            base64=base64.b64encode(placeholder).decode("ascii"),
            width=options.width,
            height=options.height,
        )


__all__ = [
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "RenderOptions",
    "RenderResult",
    "blank_png",
    "content_margins",
    "png_size",
    "rasterize",
    "render_components",
    "render_png",
    "render_svg",
    "trim_image",
]
