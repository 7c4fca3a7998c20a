"""
Deck writers for persisting draw instructions.

Supports python-pptx for deterministic generation.
"""

from slideforge.renderers.base import DeckWriter
from slideforge.renderers.pptx_writer import PptxDeckWriter

__all__ = ["DeckWriter", "PptxDeckWriter"]
