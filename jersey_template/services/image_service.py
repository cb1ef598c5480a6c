from __future__ import annotations
from pathlib import Path
from typing import Union
import logging

import cv2
import numpy as np

from ..config import TemplateConfig
from ..models.content_bounds import ContentBounds
from ..models.raster_image import RasterImage
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """Pixel-level helpers shared by the pipeline stages.  No layout logic."""
    def __init__(self, config: TemplateConfig | None = None):
        config = config or TemplateConfig()
        self.image_repository = ImageRepository(
            max_pixels=config.max_image_pixels, valid_exts=config.valid_exts
        )

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> RasterImage:
        return self.image_repository.create_image(pixels, path)

    def decode(self, data: bytes) -> RasterImage:
        return self.image_repository.decode(data)

    def load(self, path: str | Path) -> RasterImage:
        """Load a single image from disk into a RasterImage object."""
        return self.image_repository.load(path)

    def encode_png(self, image: RasterImage) -> bytes:
        return self.image_repository.encode_png(image)

    def crop_pixels(self, img: RasterImage, bound_r, bound_l, bound_t, bound_b) -> np.ndarray:
        """Copy of the region [bound_t:bound_b, bound_l:bound_r] (exclusive ends)."""
        width = bound_r - bound_l
        height = bound_b - bound_t
        logger.debug(f"Crop bounds=({bound_l},{bound_t},{bound_r},{bound_b}) → width={width}, height={height}")

        if bound_l >= bound_r or bound_t >= bound_b:
            raise ValueError(f"Invalid crop bounds would create {width}x{height} image")

        return img.pixels[bound_t:bound_b, bound_l:bound_r].copy()

    def extract(self, img: RasterImage, bounds: ContentBounds) -> RasterImage:
        """New image holding only the inclusive region described by bounds."""
        left, top, right, bottom = bounds.as_box()
        return self.create_image(
            self.crop_pixels(img, bound_r=right, bound_l=left, bound_t=top, bound_b=bottom)
        )

    def trim_uniform_border(self, img: RasterImage, threshold: int = 0) -> RasterImage:
        """
        Generic trim: drop outer rows/columns whose pixels all match the
        top-left corner pixel (every RGBA channel within threshold).
        Returns the input object itself when nothing can be removed.
        """
        corner = img.pixels[0, 0].astype(np.int16)
        diff = np.abs(img.pixels.astype(np.int16) - corner).max(axis=2) > threshold

        rows = np.flatnonzero(diff.any(axis=1))
        cols = np.flatnonzero(diff.any(axis=0))
        if rows.size == 0:
            # Whole frame matches the corner, nothing sensible to keep
            return img

        top, bottom = int(rows[0]), int(rows[-1]) + 1
        left, right = int(cols[0]), int(cols[-1]) + 1
        if (top, left, bottom, right) == (0, 0, img.height, img.width):
            return img

        return self.create_image(
            self.crop_pixels(img, bound_r=right, bound_l=left, bound_t=top, bound_b=bottom)
        )

    def mirror(self, img: RasterImage) -> RasterImage:
        """Vertical flip (rows reversed), pixel-exact."""
        return self.create_image(np.flipud(img.pixels).copy())

    def resize(self, img: RasterImage, width: int, height: int) -> RasterImage:
        """
        Lanczos resample to exactly width x height.

        Filtering runs on premultiplied alpha so fully transparent pixels
        (whatever their RGB) cannot bleed into anti-aliased edges.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Cannot resize to {width}x{height}")
        pixels = img.pixels.astype(np.float32)
        alpha = pixels[:, :, 3:4]
        pixels[:, :, :3] *= alpha / 255.0

        resized = cv2.resize(pixels, (width, height), interpolation=cv2.INTER_LANCZOS4)

        # Lanczos rings, so clamp before un-premultiplying
        alpha = np.clip(resized[:, :, 3:4], 0.0, 255.0)
        rgb = np.clip(resized[:, :, :3], 0.0, None)
        rgb = np.where(alpha > 0, rgb * 255.0 / np.maximum(alpha, 1e-6), 0.0)
        out = np.concatenate([np.clip(rgb, 0.0, 255.0), alpha], axis=2)
        return self.create_image(np.rint(out).astype(np.uint8))
