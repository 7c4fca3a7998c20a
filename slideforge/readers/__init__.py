"""
Document readers: rasterize PDF pages and extract their text layer.
"""

from slideforge.readers.base import DocumentReader, RawTextRun
from slideforge.readers.pymupdf_reader import PyMuPDFReader

__all__ = ["DocumentReader", "RawTextRun", "PyMuPDFReader"]
