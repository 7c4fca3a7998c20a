"""Pytest configuration and fixtures."""

import io
from typing import Dict, List, Optional, Union

import fitz
import pytest
from PIL import Image

from slideforge.errors import DocumentReadError, OracleError
from slideforge.geometry import PageViewport
from slideforge.oracle.base import LayoutOracle
from slideforge.oracle.schema import OracleRequest
from slideforge.readers.base import DocumentReader, RawTextRun


def make_raster(width: int = 200, height: int = 100, color=(200, 30, 30)) -> bytes:
    """A solid-color JPEG of the given size."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="JPEG")
    return buffer.getvalue()


class StubReader(DocumentReader):
    """
    In-memory document reader.

    ``pages`` is a list of (page_width, page_height, raw_runs) in PDF units.
    """

    def __init__(self, pages, fail_on_page: Optional[int] = None, fail_open: bool = False):
        super().__init__()
        self.pages = pages
        self.fail_on_page = fail_on_page
        self.fail_open = fail_open
        self.closed = False
        self.rendered: List[int] = []

    def open_document(self, data: bytes):
        if self.fail_open:
            raise DocumentReadError("Failed to open PDF: not a PDF")
        return "handle"

    def page_count(self, handle) -> int:
        return len(self.pages)

    def page_viewport(self, handle, page_index: int, scale: float) -> PageViewport:
        width, height, _ = self.pages[page_index]
        return PageViewport(page_width=width, page_height=height, scale=scale)

    def render_page(self, handle, page_index: int, scale: float, quality: float = 0.8) -> bytes:
        if page_index == self.fail_on_page:
            raise RuntimeError("renderer crashed")
        self.rendered.append(page_index)
        width, height, _ = self.pages[page_index]
        return make_raster(int(width * scale), int(height * scale))

    def extract_text_runs(self, handle, page_index: int) -> List[RawTextRun]:
        return list(self.pages[page_index][2])

    def close(self, handle) -> None:
        self.closed = True


class StubOracle(LayoutOracle):
    """
    Canned oracle answers keyed by page index.

    A value may be a response string or an exception instance to raise.
    Pages without an entry fail with OracleError.
    """

    def __init__(self, responses: Dict[int, Union[str, Exception]]):
        super().__init__()
        self.responses = responses
        self.requests: List[OracleRequest] = []

    def complete(self, request: OracleRequest) -> str:
        self.requests.append(request)
        response = self.responses.get(request.page_index, OracleError("no canned response"))
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def raster():
    """A 200x100 JPEG raster."""
    return make_raster()


@pytest.fixture
def sample_pdf_bytes():
    """A real two-page 16:9 PDF with a title on page 1 and body text on page 2."""
    doc = fitz.open()

    page = doc.new_page(width=720, height=405)
    page.draw_rect(fitz.Rect(0, 0, 720, 80), color=None, fill=(0.07, 0.13, 0.2))
    page.insert_text((72, 100), "Quarterly Review", fontsize=24)

    page = doc.new_page(width=720, height=405)
    page.insert_text((36, 200), "Revenue grew 12%", fontsize=18)

    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def sample_pdf(tmp_path, sample_pdf_bytes):
    """The sample PDF written to disk."""
    pdf_path = tmp_path / "deck.pdf"
    pdf_path.write_bytes(sample_pdf_bytes)
    return pdf_path


@pytest.fixture
def output_dir(tmp_path):
    """Create a temporary output directory."""
    out_dir = tmp_path / "output"
    out_dir.mkdir()
    return out_dir
