"""
Base document reader interface.
"""

from abc import ABC, abstractmethod
from typing import Any, List

from pydantic import BaseModel, Field

from slideforge.geometry import PageViewport


class RawTextRun(BaseModel):
    """A text run as the PDF text layer reports it, before normalization."""

    transform: List[float] = Field(..., min_length=6, max_length=6)
    raw_width: float
    text: str
    font_name: str = ""


class DocumentReader(ABC):
    """
    Rasterizes PDF pages and extracts their text layer.

    Implementations raise ``DocumentReadError`` for any failure; the handle
    returned by ``open_document`` is opaque to callers.
    """

    def __init__(self, config: dict = None):
        self.config = config or {}
        self.name = self.__class__.__name__.replace("Reader", "").lower()

    @abstractmethod
    def open_document(self, data: bytes) -> Any:
        """Open a PDF from its bytes and return a handle."""

    @abstractmethod
    def page_count(self, handle: Any) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def page_viewport(self, handle: Any, page_index: int, scale: float) -> PageViewport:
        """Viewport of a page rendered at ``scale``."""

    @abstractmethod
    def render_page(
        self, handle: Any, page_index: int, scale: float, quality: float = 0.8
    ) -> bytes:
        """Render a page to JPEG bytes at ``scale``."""

    @abstractmethod
    def extract_text_runs(self, handle: Any, page_index: int) -> List[RawTextRun]:
        """Raw text runs of a page, in the order the text layer reports them."""

    def close(self, handle: Any) -> None:
        """Release the handle. The default does nothing."""
