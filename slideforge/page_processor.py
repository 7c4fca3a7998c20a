"""
Page processing: raster + normalized text runs for every page of a PDF.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from slideforge.config import ConversionSettings
from slideforge.errors import DocumentReadError
from slideforge.geometry import normalize_text_run
from slideforge.models import TextRun
from slideforge.readers.base import DocumentReader


class ProcessedPage(BaseModel):
    """One rendered page and its text layer in percentage space."""

    model_config = {"frozen": True}

    page_index: int = Field(ge=0)
    raster: bytes = Field(repr=False)
    width_px: float = Field(gt=0)
    height_px: float = Field(gt=0)
    text_runs: List[TextRun] = Field(default_factory=list)


class PageProcessor:
    """
    Drive a DocumentReader over all pages, in page order.

    Any read failure aborts the whole document; there is no partial output.
    """

    def __init__(self, reader: DocumentReader, settings: Optional[ConversionSettings] = None):
        self.reader = reader
        self.settings = settings or ConversionSettings()

    def process(self, data: bytes) -> List[ProcessedPage]:
        """
        Render and extract every page.

        Args:
            data: PDF file contents

        Returns:
            One ProcessedPage per page

        Raises:
            DocumentReadError: if the document or any page cannot be read
        """
        handle = self._call(self.reader.open_document, data)
        try:
            page_count = self._call(self.reader.page_count, handle)
            print(f"[PDF] Processing {page_count} pages at scale {self.settings.render_scale}")
            return [self.process_page(handle, i) for i in range(page_count)]
        finally:
            self.reader.close(handle)

    def process_page(self, handle, page_index: int) -> ProcessedPage:
        """Render one page and normalize its text runs."""
        scale = self.settings.render_scale
        viewport = self._call(self.reader.page_viewport, handle, page_index, scale)
        raster = self._call(
            self.reader.render_page, handle, page_index, scale, self.settings.jpeg_quality
        )
        raw_runs = self._call(self.reader.extract_text_runs, handle, page_index)

        text_runs = []
        for raw in raw_runs:
            run = normalize_text_run(
                raw.transform, raw.raw_width, raw.text, viewport, font_name=raw.font_name
            )
            if run is not None:
                text_runs.append(run)

        print(
            f"[PDF] Page {page_index + 1}: {viewport.width:.0f}x{viewport.height:.0f}px, "
            f"{len(text_runs)}/{len(raw_runs)} text runs kept"
        )
        return ProcessedPage(
            page_index=page_index,
            raster=raster,
            width_px=viewport.width,
            height_px=viewport.height,
            text_runs=text_runs,
        )

    @staticmethod
    def _call(func, *args):
        try:
            return func(*args)
        except DocumentReadError:
            raise
        except Exception as e:
            raise DocumentReadError(f"Failed to process PDF: {e}") from e
