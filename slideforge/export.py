"""
Export transform: Slides in percentage space -> absolute draw instructions.

Draw instructions are what a DeckWriter consumes. Their geometry is in
canvas units (inches by default) against a fixed canvas size.
"""

from typing import Annotated, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

from slideforge.config import ConversionSettings
from slideforge.errors import CropError
from slideforge.geometry import percent_to_absolute
from slideforge.models import DEFAULT_BACKGROUND, ImageElement, ShapeElement, Slide, TextElement
from slideforge.raster import crop_raster

DEFAULT_SHAPE_FILL = "#CCCCCC"
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_FONT_SIZE = 14.0


class ShapeInstruction(BaseModel):
    """A fill-only shape with no outline."""

    kind: Literal["shape"] = "shape"
    left: float
    top: float
    width: float
    height: float
    fill_color: str = DEFAULT_SHAPE_FILL
    shape_kind: Literal["rect", "ellipse", "line"] = "rect"


class TextInstruction(BaseModel):
    """A word-wrapped text box."""

    kind: Literal["text"] = "text"
    left: float
    top: float
    width: float
    height: float
    content: str
    font_size: float = DEFAULT_FONT_SIZE
    color: str = DEFAULT_TEXT_COLOR
    bold: bool = False
    align: Literal["left", "center", "right"] = "left"
    wrap: bool = True
    font_face: Optional[str] = None


class ImageInstruction(BaseModel):
    """A picture; ``image`` is either the full page raster or a crop of it."""

    kind: Literal["image"] = "image"
    left: float
    top: float
    width: float
    height: float
    image: bytes = Field(repr=False)
    cropped: bool = False


DrawInstruction = Annotated[
    Union[ShapeInstruction, TextInstruction, ImageInstruction], Field(discriminator="kind")
]


class SlideInstructions(BaseModel):
    """Everything a DeckWriter needs to draw one slide, in paint order."""

    index: int
    background_color: str = DEFAULT_BACKGROUND
    instructions: List[DrawInstruction] = Field(default_factory=list)


def needs_crop(element: ImageElement, threshold: float) -> bool:
    """Images smaller than the threshold in either dimension get cropped."""
    return element.w < threshold or element.h < threshold


class ExportTransform:
    """Convert Slides into SlideInstructions for the configured canvas."""

    def __init__(self, settings: Optional[ConversionSettings] = None):
        self.settings = settings or ConversionSettings()

    def export(self, slides: Sequence[Slide]) -> List[SlideInstructions]:
        """
        Convert every slide, preserving slide and element order.

        An image element whose crop fails is left out; everything else on
        the slide is still emitted.
        """
        return [self.export_slide(slide) for slide in slides]

    def export_slide(self, slide: Slide) -> SlideInstructions:
        instructions = []
        for position, element in enumerate(slide.elements):
            try:
                instructions.append(self.export_element(element, slide))
            except CropError as e:
                print(
                    f"[Export] Warning: Skipping image {position} on slide {slide.index + 1}: {e}"
                )

        return SlideInstructions(
            index=slide.index,
            background_color=slide.background_color or DEFAULT_BACKGROUND,
            instructions=instructions,
        )

    def export_element(self, element, slide: Slide):
        """
        Convert one element to its draw instruction.

        Raises:
            CropError: if an image element needs a crop that cannot be made
        """
        if not isinstance(element, (ShapeElement, TextElement, ImageElement)):
            raise TypeError(f"Unsupported element kind: {getattr(element, 'kind', element)!r}")

        left, top, width, height = percent_to_absolute(
            element.x,
            element.y,
            element.w,
            element.h,
            self.settings.canvas_width_inches,
            self.settings.canvas_height_inches,
        )
        box = {"left": left, "top": top, "width": width, "height": height}

        if isinstance(element, ShapeElement):
            return ShapeInstruction(
                **box,
                fill_color=element.bg_color or DEFAULT_SHAPE_FILL,
                shape_kind=element.shape_kind or "rect",
            )
        elif isinstance(element, TextElement):
            return TextInstruction(
                **box,
                content=element.content,
                font_size=element.font_size or DEFAULT_FONT_SIZE,
                color=element.color or DEFAULT_TEXT_COLOR,
                bold=bool(element.bold),
                align=element.align or "left",
                font_face=self.settings.font_face,
            )
        else:
            if needs_crop(element, self.settings.crop_threshold):
                image = crop_raster(
                    slide.original_raster,
                    element.x,
                    element.y,
                    element.w,
                    element.h,
                    quality=self.settings.crop_jpeg_quality,
                )
                return ImageInstruction(**box, image=image, cropped=True)
            return ImageInstruction(**box, image=slide.original_raster, cropped=False)


def export_slides(
    slides: Sequence[Slide], settings: Optional[ConversionSettings] = None
) -> List[SlideInstructions]:
    """Convert slides to draw instructions with the given (or default) settings."""
    return ExportTransform(settings).export(slides)
