"""
Core data models for SlideForge.

All geometry in these models is in percentage space: positions and sizes are
fractions (0-100) of the page or slide width/height, with a top-left origin.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

DEFAULT_BACKGROUND = "#FFFFFF"


class TextRun(BaseModel):
    """A span of text from the PDF text layer, normalized to percentage space."""

    model_config = {"frozen": True}

    text: str
    x: float
    y: float
    width: float
    height: float
    font_name: str = ""


# --- Slide elements (tagged union on ``kind``) ---


class TextElement(BaseModel):
    """An editable text box."""

    model_config = {"allow_inf_nan": False}

    kind: Literal["text"] = "text"
    x: float
    y: float
    w: float
    h: float
    content: str = ""
    color: Optional[str] = None  # Hex color
    font_size: Optional[float] = Field(default=None, ge=1, le=4000)  # Points
    bold: Optional[bool] = None
    align: Optional[Literal["left", "center", "right"]] = None


class ShapeElement(BaseModel):
    """A filled rectangle, ellipse or line."""

    model_config = {"allow_inf_nan": False}

    kind: Literal["shape"] = "shape"
    x: float
    y: float
    w: float
    h: float
    bg_color: Optional[str] = None  # Hex color
    shape_kind: Optional[Literal["rect", "ellipse", "line"]] = None


class ImageElement(BaseModel):
    """A region of the slide's original raster."""

    model_config = {"allow_inf_nan": False}

    kind: Literal["image"] = "image"
    x: float
    y: float
    w: float
    h: float


SlideElement = Annotated[
    Union[TextElement, ShapeElement, ImageElement], Field(discriminator="kind")
]


class Slide(BaseModel):
    """
    A reconstructed slide.

    ``elements`` is in paint order: later elements are drawn on top of
    earlier ones. ``original_raster`` and ``source_text_runs`` are fixed at
    creation; only ``elements`` and ``background_color`` change afterwards.
    """

    index: int = Field(ge=0)
    background_color: str = DEFAULT_BACKGROUND
    elements: List[SlideElement] = Field(default_factory=list)
    original_raster: bytes = Field(frozen=True, repr=False, exclude=True)
    source_text_runs: Tuple[TextRun, ...] = Field(default=(), frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Export to dict for JSON serialization (raster bytes excluded)."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], original_raster: bytes) -> "Slide":
        """Load from dict, re-attaching the raster stored alongside it."""
        return cls.model_validate({**data, "original_raster": original_raster})


def fallback_slide(index: int, raster: bytes, text_runs=()) -> Slide:
    """The single full-bleed image slide used when layout inference fails."""
    return Slide(
        index=index,
        background_color=DEFAULT_BACKGROUND,
        elements=[ImageElement(x=0, y=0, w=100, h=100)],
        original_raster=raster,
        source_text_runs=tuple(text_runs),
    )


# --- Review edits ---
#
# Both functions return a new slide list; the touched slide and element are
# copies, every other slide and element is the same object as before.


def _editable_fields(element) -> List[str]:
    return [name for name in type(element).model_fields if name != "kind"]


def _check_index(index: int, length: int, what: str) -> None:
    if not 0 <= index < length:
        raise IndexError(f"{what} index {index} out of range (0..{length - 1})")


def replace_element_field(
    slides: List[Slide], slide_index: int, element_index: int, field: str, value: Any
) -> List[Slide]:
    """Replace exactly one field of one element."""
    _check_index(slide_index, len(slides), "Slide")
    slide = slides[slide_index]
    _check_index(element_index, len(slide.elements), "Element")
    element = slide.elements[element_index]

    if field not in _editable_fields(element):
        raise ValueError(f"Field '{field}' is not editable on a {element.kind} element")

    updated = type(element).model_validate({**element.model_dump(), field: value})

    elements = list(slide.elements)
    elements[element_index] = updated

    result = list(slides)
    result[slide_index] = slide.model_copy(update={"elements": elements})
    return result


def remove_element(slides: List[Slide], slide_index: int, element_index: int) -> List[Slide]:
    """Remove one element; later elements shift down by one index."""
    _check_index(slide_index, len(slides), "Slide")
    slide = slides[slide_index]
    _check_index(element_index, len(slide.elements), "Element")

    elements = slide.elements[:element_index] + slide.elements[element_index + 1:]

    result = list(slides)
    result[slide_index] = slide.model_copy(update={"elements": elements})
    return result


def replace_background_color(slides: List[Slide], slide_index: int, color: str) -> List[Slide]:
    """Replace the background color of one slide."""
    _check_index(slide_index, len(slides), "Slide")
    result = list(slides)
    result[slide_index] = slides[slide_index].model_copy(update={"background_color": color})
    return result
