"""Tests for pixel helpers: mirroring, cropping, resizing, codec."""

from io import BytesIO

import numpy as np
import pytest
from PIL import Image as PILImage

from conftest import make_rgba, row_gradient, to_png
from jersey_template.config import TemplateConfig
from jersey_template.exceptions import DecodeError
from jersey_template.models.content_bounds import ContentBounds
from jersey_template.services.image_service import ImageService


@pytest.fixture
def image_service(config: TemplateConfig) -> ImageService:
    return ImageService(config)


def test_mirror_reverses_rows(image_service: ImageService) -> None:
    img = row_gradient(7, 12)
    mirrored = image_service.mirror(img)
    assert (mirrored.width, mirrored.height, mirrored.channels) == (7, 12, 4)
    assert list(mirrored.pixels[:, 0, 0]) == list(range(11, -1, -1))


def test_mirror_twice_is_identity(image_service: ImageService) -> None:
    rng = np.random.default_rng(7)
    img = make_rgba(13, 9)
    img.pixels[:] = rng.integers(0, 256, size=img.pixels.shape, dtype=np.uint8)
    twice = image_service.mirror(image_service.mirror(img))
    assert twice.pixels.tobytes() == img.pixels.tobytes()


def test_mirror_returns_independent_buffer(image_service: ImageService) -> None:
    img = row_gradient(4, 4)
    mirrored = image_service.mirror(img)
    mirrored.pixels[:] = 0
    assert img.pixels[3, 0, 0] == 3


def test_extract_uses_inclusive_bounds(image_service: ImageService) -> None:
    img = row_gradient(10, 10)
    region = image_service.extract(img, ContentBounds(top=2, bottom=5, left=1, right=8))
    assert (region.width, region.height) == (8, 4)
    assert region.pixels[0, 0, 0] == 2


def test_crop_pixels_rejects_empty_region(image_service: ImageService) -> None:
    img = make_rgba(10, 10)
    with pytest.raises(ValueError, match="Invalid crop bounds"):
        image_service.crop_pixels(img, bound_r=5, bound_l=5, bound_t=0, bound_b=10)


def test_resize_hits_exact_size(image_service: ImageService) -> None:
    img = make_rgba(41, 21, rect=(0, 0, 40, 20))
    resized = image_service.resize(img, 20, 10)
    assert (resized.width, resized.height, resized.channels) == (20, 10, 4)


def test_decode_promotes_rgb_to_rgba(image_service: ImageService) -> None:
    buffer = BytesIO()
    PILImage.new("RGB", (6, 4), (10, 20, 30)).save(buffer, format="JPEG")
    img = image_service.decode(buffer.getvalue())
    assert (img.width, img.height, img.channels) == (6, 4, 4)
    assert (img.alpha == 255).all()


def test_decode_keeps_alpha(image_service: ImageService, padded_jersey) -> None:
    img = image_service.decode(to_png(padded_jersey))
    assert img.pixels.tobytes() == padded_jersey.pixels.tobytes()


@pytest.mark.parametrize("data", [b"", b"not an image", b"GIF89a"])
def test_decode_rejects_garbage(image_service: ImageService, data: bytes) -> None:
    with pytest.raises(DecodeError):
        image_service.decode(data)


def test_decode_rejects_oversized_input(padded_jersey) -> None:
    image_service = ImageService(TemplateConfig(max_image_pixels=1000))
    with pytest.raises(DecodeError, match="too large"):
        image_service.decode(to_png(padded_jersey))


def test_resize_does_not_bleed_transparent_rgb(image_service: ImageService) -> None:
    img = make_rgba(30, 30, rect=(9, 9, 20, 20), color=(0, 200, 0))
    img.pixels[img.pixels[:, :, 3] == 0] = (255, 0, 255, 0)  # garish hidden RGB
    pixels = image_service.resize(img, 15, 15).pixels
    visible = pixels[:, :, 3] > 0
    assert visible.any()
    assert (pixels[visible][:, 0] <= 5).all()
    assert (pixels[visible][:, 2] <= 5).all()
