"""
Layout oracle request/response contract.

The oracle answers with camelCase JSON; ``OracleLayout`` validates it and
converts each entry into a SlideElement.
"""

import json
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from slideforge.errors import OracleError
from slideforge.models import (
    DEFAULT_BACKGROUND,
    ImageElement,
    ShapeElement,
    TextElement,
    TextRun,
)

SYSTEM_INSTRUCTION = """You are an expert presentation layout parser. Your goal is to analyze an image of a presentation slide and extract a structured JSON representation to reconstruct it as an editable PowerPoint file.

Input:
1. An image of the slide.
2. A list of text items extracted from the PDF text layer (content and percentage coordinates).

Analysis strategy:
1. Deconstruct layers: identify the background color first, then shapes that serve as containers.
2. Text mapping (critical):
   - Use the provided text items as the ground truth for text content.
   - Do not OCR the image if you can match it to the provided text.
   - Group fragmented text items into logical paragraphs or headings based on the visuals.
3. Visual assets:
   - Photos, icons, logos: kind "image".
   - Simple rectangles, circles and dividers: kind "shape".
4. Layout: if text sits inside a colored box, create a shape element for the box, then a text element for the content.

Properties:
- Coordinates (x, y, w, h): percentage (0-100) relative to the top-left corner. Bounding boxes must be tight.
- fontSize: estimate in points. Title: 40-60pt, body: 14-20pt.
- Colors: 6-digit hex codes.
- align: "left", "center" or "right".

Output order: background shapes, then images, then text."""

# Gemini response schema (OpenAPI subset)
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "backgroundColor": {
            "type": "STRING",
            "description": "Hex color code for the slide background canvas",
        },
        "elements": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "kind": {"type": "STRING", "enum": ["text", "shape", "image"]},
                    "content": {
                        "type": "STRING",
                        "description": "The text content. Leave empty for shapes and images.",
                    },
                    "x": {"type": "NUMBER", "description": "Left position (0-100)"},
                    "y": {"type": "NUMBER", "description": "Top position (0-100)"},
                    "w": {"type": "NUMBER", "description": "Width (0-100)"},
                    "h": {"type": "NUMBER", "description": "Height (0-100)"},
                    "color": {"type": "STRING", "description": "Text color hex code"},
                    "bgColor": {"type": "STRING", "description": "Shape fill color hex code"},
                    "fontSize": {"type": "NUMBER", "description": "Estimated font size in points"},
                    "bold": {"type": "BOOLEAN", "description": "True if text is bold"},
                    "align": {"type": "STRING", "enum": ["left", "center", "right"]},
                    "shapeKind": {
                        "type": "STRING",
                        "enum": ["rect", "ellipse", "line"],
                        "description": "Only for kind=shape",
                    },
                },
                "required": ["kind", "x", "y", "w", "h"],
            },
        },
    },
    "required": ["backgroundColor", "elements"],
}


class OracleRequest(BaseModel):
    """What the oracle sees for one page: the JPEG raster and its text layer."""

    page_index: int = Field(ge=0)
    image: bytes = Field(repr=False)
    text_runs: List[TextRun] = Field(default_factory=list)

    def text_layer(self) -> List[Dict[str, Any]]:
        """Text runs with coordinates rounded to whole percentages."""
        return [
            {
                "text": run.text,
                "x": round(run.x),
                "y": round(run.y),
                "w": round(run.width),
                "h": round(run.height),
            }
            for run in self.text_runs
        ]

    def text_layer_json(self) -> str:
        return json.dumps(self.text_layer(), ensure_ascii=False, separators=(",", ":"))

    def user_prompt(self) -> str:
        return f"Analyze this slide. EXTRACTED_TEXT_LAYER: {self.text_layer_json()}"


class OracleElement(BaseModel):
    """One element as the oracle describes it."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )

    kind: Literal["text", "shape", "image"]
    x: float
    y: float
    w: float
    h: float
    content: Optional[str] = None
    color: Optional[str] = None
    bg_color: Optional[str] = None
    font_size: Optional[float] = Field(default=None, ge=1, le=4000)
    bold: Optional[bool] = None
    align: Optional[Literal["left", "center", "right"]] = None
    shape_kind: Optional[Literal["rect", "ellipse", "line"]] = None

    def to_element(self):
        """Convert to the matching SlideElement variant."""
        box = {"x": self.x, "y": self.y, "w": self.w, "h": self.h}
        if self.kind == "text":
            return TextElement(
                **box,
                content=self.content or "",
                color=self.color,
                font_size=self.font_size,
                bold=self.bold,
                align=self.align,
            )
        if self.kind == "shape":
            return ShapeElement(**box, bg_color=self.bg_color, shape_kind=self.shape_kind)
        if self.kind == "image":
            return ImageElement(**box)
        raise ValueError(f"Unknown element kind: {self.kind}")


class OracleLayout(BaseModel):
    """A complete oracle response for one slide."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    background_color: Optional[str] = None
    elements: List[OracleElement] = Field(default_factory=list)

    @property
    def resolved_background(self) -> str:
        return self.background_color or DEFAULT_BACKGROUND


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code block, if the model added one."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_layout_response(text: Optional[str]) -> OracleLayout:
    """
    Parse and validate raw oracle output.

    Raises:
        OracleError: if the text is empty, not JSON, or fails the schema
    """
    if not text or not text.strip():
        raise OracleError("No response from layout oracle")

    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise OracleError(f"Invalid JSON from layout oracle: {e}") from e

    try:
        return OracleLayout.model_validate(data)
    except ValidationError as e:
        raise OracleError(f"Layout response failed schema validation: {e}") from e
