"""
SlideForge: Rebuild flat slide PDFs as editable PPTX.

Renders each page, normalizes its text layer, asks a multimodal LLM for a
structured layout, and re-emits that layout as editable PowerPoint shapes,
text boxes and cropped images.
"""

__version__ = "0.1.0"
__author__ = "SlideForge Team"

from slideforge.models import Slide, TextRun, TextElement, ShapeElement, ImageElement
from slideforge.session import DeckSession
from slideforge.pipeline import SlideForgePipeline

__all__ = [
    "Slide",
    "TextRun",
    "TextElement",
    "ShapeElement",
    "ImageElement",
    "DeckSession",
    "SlideForgePipeline",
]
