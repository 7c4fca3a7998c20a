"""
Raster helpers built on Pillow.

Rasters travel through the pipeline as encoded JPEG bytes; these helpers
decode, crop and re-encode them without touching any drawing surface.
"""

import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from slideforge.errors import CropError
from slideforge.geometry import percent_to_pixel_rect


def encode_jpeg(image: Image.Image, quality: float) -> bytes:
    """Encode a PIL image as JPEG; ``quality`` is on a 0-1 scale."""
    if image.mode != "RGB":
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=int(round(quality * 100)))
    return buffer.getvalue()


def raster_size(raster: bytes) -> Tuple[int, int]:
    """(width, height) in pixels of an encoded raster."""
    with Image.open(io.BytesIO(raster)) as img:
        return img.size


def crop_raster(
    raster: bytes, x: float, y: float, w: float, h: float, quality: float = 0.9
) -> bytes:
    """
    Copy the percentage box (x, y, w, h) out of an encoded raster.

    The crop box is computed against the raster's own pixel size and clamped
    to at least 1x1. Areas outside the source come back black.

    Raises:
        CropError: if the raster cannot be decoded or cropped
    """
    try:
        with Image.open(io.BytesIO(raster)) as img:
            img.load()
            crop_box = percent_to_pixel_rect(x, y, w, h, img.width, img.height)
            cropped = img.crop(crop_box)
            return encode_jpeg(cropped, quality)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise CropError(f"Failed to crop raster at ({x}, {y}, {w}, {h}): {e}") from e
