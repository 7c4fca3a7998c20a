"""
Document reader backed by PyMuPDF (fitz).

PyMuPDF renders pages without external dependencies like Poppler and exposes
text spans with their baseline origin, which is enough to rebuild the
PDF-space transform of each run.
"""

from typing import List

import fitz  # PyMuPDF
from PIL import Image

from slideforge.errors import DocumentReadError
from slideforge.geometry import PageViewport
from slideforge.raster import encode_jpeg
from slideforge.readers.base import DocumentReader, RawTextRun


class PyMuPDFReader(DocumentReader):
    """Read PDFs with PyMuPDF and encode page rasters with Pillow."""

    def open_document(self, data: bytes) -> fitz.Document:
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DocumentReadError(f"Failed to open PDF: {e}") from e

        if doc.needs_pass:
            doc.close()
            raise DocumentReadError("Failed to open PDF: document is password protected")
        return doc

    def page_count(self, handle: fitz.Document) -> int:
        return handle.page_count

    def page_viewport(self, handle: fitz.Document, page_index: int, scale: float) -> PageViewport:
        page = self._load_page(handle, page_index)
        return PageViewport(
            page_width=page.rect.width, page_height=page.rect.height, scale=scale
        )

    def render_page(
        self, handle: fitz.Document, page_index: int, scale: float, quality: float = 0.8
    ) -> bytes:
        page = self._load_page(handle, page_index)
        try:
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
            return encode_jpeg(image, quality)
        except Exception as e:
            raise DocumentReadError(f"Failed to render page {page_index + 1}: {e}") from e

    def extract_text_runs(self, handle: fitz.Document, page_index: int) -> List[RawTextRun]:
        page = self._load_page(handle, page_index)
        try:
            page_dict = page.get_text("dict")
        except Exception as e:
            raise DocumentReadError(
                f"Failed to extract text from page {page_index + 1}: {e}"
            ) from e

        page_height = page.rect.height
        runs = []
        for block in page_dict.get("blocks", []):
            if block.get("type") != 0:  # 0 = text, 1 = image
                continue
            for line in block.get("lines", []):
                # Direction is (cos, sin) in top-left space; flip sin for PDF space
                dx, dy = line.get("dir", (1.0, 0.0))
                for span in line.get("spans", []):
                    size = span.get("size", 0.0)
                    ox, oy = span.get("origin", (0.0, 0.0))
                    x0, _, x1, _ = span.get("bbox", (0.0, 0.0, 0.0, 0.0))
                    runs.append(
                        RawTextRun(
                            transform=[
                                size * dx,
                                -size * dy,
                                size * dy,
                                size * dx,
                                ox,
                                page_height - oy,
                            ],
                            raw_width=x1 - x0,
                            text=span.get("text", ""),
                            font_name=span.get("font", ""),
                        )
                    )
        return runs

    def close(self, handle: fitz.Document) -> None:
        handle.close()

    @staticmethod
    def _load_page(handle: fitz.Document, page_index: int) -> fitz.Page:
        try:
            return handle.load_page(page_index)
        except Exception as e:
            raise DocumentReadError(f"Failed to load page {page_index + 1}: {e}") from e
