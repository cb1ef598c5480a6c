"""Test fixtures for the jersey template pipeline.

Images are synthesised with numpy so the suite needs no binary fixtures.
"""

from io import BytesIO

import numpy as np
import pytest
from PIL import Image as PILImage

from jersey_template.config import TemplateConfig
from jersey_template.models.raster_image import RasterImage


def make_rgba(width, height, rect=None, color=(200, 30, 30), alpha=255):
    """Transparent width x height image, optionally with a filled rect.

    rect is (left, top, right, bottom), all inclusive.
    """
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    if rect is not None:
        left, top, right, bottom = rect
        pixels[top:bottom + 1, left:right + 1, :3] = color
        pixels[top:bottom + 1, left:right + 1, 3] = alpha
    return RasterImage(pixels)


def row_gradient(width, height):
    """Opaque image whose red channel equals the row index (mod 256)."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :, 0] = (np.arange(height) % 256).astype(np.uint8)[:, None]
    pixels[:, :, 3] = 255
    return RasterImage(pixels)


def to_png(img: RasterImage) -> bytes:
    buffer = BytesIO()
    PILImage.fromarray(img.pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def from_png(data: bytes) -> np.ndarray:
    with PILImage.open(BytesIO(data)) as pil_img:
        assert pil_img.format == "PNG"
        return np.array(pil_img.convert("RGBA"))


@pytest.fixture
def config() -> TemplateConfig:
    return TemplateConfig()


@pytest.fixture
def padded_jersey() -> RasterImage:
    """200x300 canvas, 100x150 opaque block at (50,75)-(149,224)."""
    return make_rgba(200, 300, rect=(50, 75, 149, 224))


@pytest.fixture
def collar_png() -> bytes:
    """Opaque 40x20 collar; halves to 20x10."""
    return to_png(make_rgba(40, 20, rect=(0, 0, 39, 19), color=(10, 10, 240)))
