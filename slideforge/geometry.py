"""
Coordinate conversion between PDF text-run transforms, percentage space and
absolute slide units.
"""

import math
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from slideforge.models import TextRun


class PageViewport(BaseModel):
    """
    A page rendered at ``scale``.

    PDF user space has a bottom-left origin; the viewport (device pixels) has
    a top-left origin. Only unrotated pages with an origin-anchored box are
    modelled.
    """

    model_config = {"frozen": True}

    page_width: float = Field(gt=0, description="Page width in PDF units")
    page_height: float = Field(gt=0, description="Page height in PDF units")
    scale: float = Field(gt=0)

    @property
    def width(self) -> float:
        return self.page_width * self.scale

    @property
    def height(self) -> float:
        return self.page_height * self.scale

    def convert_to_viewport_point(self, x: float, y: float) -> Tuple[float, float]:
        """Map a point from PDF user space to viewport pixels."""
        return x * self.scale, (self.page_height - y) * self.scale


def font_size_from_transform(transform: Sequence[float]) -> float:
    """Length of the x basis vector; ignores shear, so horizontal text only."""
    a, b = transform[0], transform[1]
    return math.sqrt(a * a + b * b)


def normalize_text_run(
    transform: Sequence[float],
    raw_width: float,
    text: str,
    viewport: PageViewport,
    font_name: str = "",
) -> Optional[TextRun]:
    """
    Convert one raw text run into percentage space.

    The transform's (e, f) is the baseline origin; the box top is estimated
    as one font size above the baseline. Runs whose text is blank return
    None. Values are not clamped to 0-100.
    """
    if not text.strip():
        return None

    if len(transform) != 6:
        raise ValueError(f"Expected a 6-element transform, got {len(transform)}")

    font_size = font_size_from_transform(transform)
    px, py = viewport.convert_to_viewport_point(transform[4], transform[5])

    return TextRun(
        text=text,
        x=px / viewport.width * 100,
        y=(py - font_size) / viewport.height * 100,
        width=raw_width / (viewport.width / viewport.scale) * 100,
        height=font_size / viewport.height * 100,
        font_name=font_name,
    )


def percent_to_absolute(
    x: float, y: float, w: float, h: float, canvas_width: float, canvas_height: float
) -> Tuple[float, float, float, float]:
    """
    Convert a percentage box to absolute canvas units.

    Returns:
        (left, top, width, height) in canvas units
    """
    return (
        x / 100 * canvas_width,
        y / 100 * canvas_height,
        w / 100 * canvas_width,
        h / 100 * canvas_height,
    )


def percent_to_pixel_rect(
    x: float, y: float, w: float, h: float, image_width: int, image_height: int
) -> Tuple[int, int, int, int]:
    """
    Convert a percentage box to a pixel crop box for an image of the given size.

    The origin is floored; right and bottom are rounded from x+w and y+h and
    kept at least one pixel past the origin.

    Returns:
        (left, top, right, bottom) in pixels, as used by PIL's ``Image.crop``
    """
    left = math.floor(x / 100 * image_width)
    top = math.floor(y / 100 * image_height)
    right = max(left + 1, int(round((x + w) / 100 * image_width)))
    bottom = max(top + 1, int(round((y + h) / 100 * image_height)))
    return left, top, right, bottom
