"""
PPTX deck writer using python-pptx.

Draws SlideInstructions onto blank slides; all geometry arrives in inches.
"""

import io
from pathlib import Path
from typing import List, Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_PARAGRAPH_ALIGNMENT
from pptx.util import Inches, Pt

from slideforge.errors import ExportWriteError
from slideforge.export import (
    DEFAULT_SHAPE_FILL,
    DEFAULT_TEXT_COLOR,
    ImageInstruction,
    ShapeInstruction,
    SlideInstructions,
    TextInstruction,
)
from slideforge.renderers.base import DeckWriter

BLANK_LAYOUT = 6

# Lines are drawn as thin filled bars so they stay fill-only
SHAPE_TYPE_MAP = {
    "rect": MSO_SHAPE.RECTANGLE,
    "ellipse": MSO_SHAPE.OVAL,
    "line": MSO_SHAPE.RECTANGLE,
}

ALIGN_MAP = {
    "left": PP_PARAGRAPH_ALIGNMENT.LEFT,
    "center": PP_PARAGRAPH_ALIGNMENT.CENTER,
    "right": PP_PARAGRAPH_ALIGNMENT.RIGHT,
}

# Minimum visible thickness for a zero-height/zero-width line, in inches
MIN_LINE_THICKNESS = 0.01


class PptxDeckWriter(DeckWriter):
    """
    Render SlideInstructions into a PowerPoint presentation.

    Features:
    - Solid slide backgrounds
    - Fill-only rectangles, ellipses and lines
    - Word-wrapped, editable text boxes
    - Pictures from in-memory JPEG bytes
    """

    def write(self, slides: List[SlideInstructions], output_path: Path) -> Path:
        output_path = Path(output_path)
        try:
            prs = self.build(slides)
        except Exception as e:
            raise ExportWriteError(f"Failed to render presentation: {e}") from e

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            prs.save(str(output_path))
        except OSError as e:
            raise ExportWriteError(f"Failed to write {output_path}: {e}") from e

        print(f"[PPTX] Saved presentation to {output_path}")
        return output_path

    def build(self, slides: List[SlideInstructions]) -> Presentation:
        """Build the in-memory presentation without saving it."""
        prs = Presentation()
        prs.slide_width = Inches(self.canvas_width)
        prs.slide_height = Inches(self.canvas_height)

        print(f"[PPTX] Rendering {len(slides)} slides ({self.canvas_width}\" x {self.canvas_height}\")")

        for i, slide_data in enumerate(slides):
            print(
                f"[PPTX] Rendering slide {i + 1}/{len(slides)} "
                f"({len(slide_data.instructions)} elements)"
            )
            slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
            self._render_background(slide, slide_data.background_color)

            for instruction in slide_data.instructions:
                if isinstance(instruction, ShapeInstruction):
                    self._render_shape(instruction, slide)
                elif isinstance(instruction, TextInstruction):
                    self._render_text(instruction, slide)
                elif isinstance(instruction, ImageInstruction):
                    self._render_image(instruction, slide)
                else:
                    raise TypeError(f"Unsupported draw instruction: {instruction!r}")

        return prs

    def _render_background(self, slide, hex_color: str) -> None:
        color = self._parse_hex_color(hex_color)
        if color is None:
            return
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = color

    def _render_shape(self, instruction: ShapeInstruction, slide) -> None:
        width, height = max(instruction.width, 0), max(instruction.height, 0)
        if instruction.shape_kind == "line":
            width = max(width, MIN_LINE_THICKNESS)
            height = max(height, MIN_LINE_THICKNESS)

        shape = slide.shapes.add_shape(
            SHAPE_TYPE_MAP[instruction.shape_kind],
            Inches(instruction.left),
            Inches(instruction.top),
            Inches(width),
            Inches(height),
        )

        color = self._parse_hex_color(instruction.fill_color) or self._parse_hex_color(
            DEFAULT_SHAPE_FILL
        )
        shape.fill.solid()
        shape.fill.fore_color.rgb = color

        # No outline, no theme shadow
        shape.line.fill.background()
        shape.shadow.inherit = False

    def _render_text(self, instruction: TextInstruction, slide) -> None:
        textbox = slide.shapes.add_textbox(
            Inches(instruction.left),
            Inches(instruction.top),
            Inches(max(instruction.width, 0)),
            Inches(max(instruction.height, 0)),
        )
        text_frame = textbox.text_frame
        text_frame.word_wrap = instruction.wrap
        text_frame.vertical_anchor = MSO_ANCHOR.TOP

        # Minimize margins for tighter layout
        text_frame.margin_left = 0
        text_frame.margin_right = 0
        text_frame.margin_top = 0
        text_frame.margin_bottom = 0

        text_frame.text = instruction.content
        color = self._parse_hex_color(instruction.color) or self._parse_hex_color(
            DEFAULT_TEXT_COLOR
        )

        for p in text_frame.paragraphs:
            p.alignment = ALIGN_MAP[instruction.align]
            for run in p.runs:
                run.font.size = Pt(instruction.font_size)
                run.font.bold = instruction.bold
                run.font.color.rgb = color
                if instruction.font_face:
                    run.font.name = instruction.font_face

    def _render_image(self, instruction: ImageInstruction, slide) -> None:
        try:
            slide.shapes.add_picture(
                io.BytesIO(instruction.image),
                Inches(instruction.left),
                Inches(instruction.top),
                width=Inches(max(instruction.width, 0)),
                height=Inches(max(instruction.height, 0)),
            )
        except Exception as e:
            print(f"[PPTX] Warning: Failed to add image: {e}")

    @staticmethod
    def _parse_hex_color(hex_color: Optional[str]) -> Optional[RGBColor]:
        """Parse hex color string to RGBColor."""
        if not hex_color:
            return None
        try:
            hex_color = hex_color.strip().lstrip("#")
            if len(hex_color) == 3:
                hex_color = "".join(c * 2 for c in hex_color)
            if len(hex_color) == 6:
                r = int(hex_color[0:2], 16)
                g = int(hex_color[2:4], 16)
                b = int(hex_color[4:6], 16)
                return RGBColor(r, g, b)
        except ValueError:
            pass
        return None
