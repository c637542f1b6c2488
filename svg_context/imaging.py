"""Raster image embedding (Pillow PNG codec + base64 data URIs)."""

from __future__ import annotations

import base64
from enum import Enum
from io import BytesIO

from PIL import Image


class ResamplingQuality(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def image_rendering(self) -> str:
        """Value of the SVG ``image-rendering`` attribute for this level."""
        return _IMAGE_RENDERING[self]


_IMAGE_RENDERING = {
    ResamplingQuality.LOW: "optimizeSpeed",
    ResamplingQuality.MEDIUM: "auto",
    ResamplingQuality.HIGH: "optimizeQuality",
}


def encode_png(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def png_data_uri(image: Image.Image) -> str:
    """Encode ``image`` as a ``data:image/png;base64,...`` URI."""
    return "data:image/png;base64," + base64.b64encode(encode_png(image)).decode("ascii")


def alpha_mask(image: Image.Image) -> Image.Image:
    """Single-channel image usable as an SVG luminance mask.

    Images with transparency contribute their alpha channel; opaque images
    contribute their luminance.
    """
    if image.mode in ("RGBA", "LA", "PA") or (image.mode == "P" and "transparency" in image.info):
        return image.convert("RGBA").getchannel("A")
    if image.mode == "L":
        return image.copy()
    return image.convert("L")
