"""
Error taxonomy for SlideForge.

Fatal errors (DocumentReadError, ExportWriteError) propagate to the caller.
OracleError and CropError are recovered locally by the reconstruction and
export stages.
"""


class SlideForgeError(Exception):
    """Base class for all SlideForge errors."""


class DocumentReadError(SlideForgeError):
    """The PDF cannot be opened, or a page cannot be rendered or text-extracted."""


class OracleError(SlideForgeError):
    """The layout oracle failed for one page (network, HTTP status, or schema)."""


class CropError(SlideForgeError):
    """A cropped raster could not be produced for one image element."""


class ExportWriteError(SlideForgeError):
    """The deck writer could not persist the presentation file."""
