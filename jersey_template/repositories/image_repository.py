from __future__ import annotations
from io import BytesIO
from pathlib import Path
from typing import Union, Iterable, Iterator
import logging

import numpy as np
from PIL import Image as PILImage, UnidentifiedImageError

from ..exceptions import DecodeError, EncodeError
from ..models.raster_image import RasterImage

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles codec and file I/O for RasterImage entities.
    Everything leaving this class is RGBA uint8; everything entering the
    encoder must be too.
    """
    def __init__(self, max_pixels: int = 40_000_000, valid_exts: Iterable[str] | None = None):
        self.max_pixels = max_pixels
        self.VALID_EXTS = {ext.lower() for ext in (valid_exts or (".png", ".jpg", ".jpeg", ".gif", ".webp"))}

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> RasterImage:
        if path is None:
            return RasterImage(pixels)
        return RasterImage(pixels=pixels, path=Path(path))

    def decode(self, data: bytes, path: Union[str, Path] = None) -> RasterImage:
        """
        Decode PNG/JPEG/GIF/WEBP bytes into RGBA pixels.
        Images without alpha are promoted with alpha=255; animated inputs
        contribute their first frame only.
        """
        if not data:
            raise DecodeError("Empty image data")
        try:
            with PILImage.open(BytesIO(data)) as pil_img:
                width, height = pil_img.size
                if width * height > self.max_pixels:
                    raise DecodeError(
                        f"Image too large: {width}x{height} exceeds {self.max_pixels} pixels"
                    )
                rgba = pil_img.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError, PILImage.DecompressionBombError) as err:
            raise DecodeError(f"Unreadable image: {err}") from err

        pixels = np.array(rgba, dtype=np.uint8)
        return self.create_image(pixels, path)

    @staticmethod
    def read_bytes(path: Union[str, Path]) -> bytes:
        path = Path(path)
        try:
            return path.read_bytes()
        except OSError as err:
            raise DecodeError(f"Image not found or unreadable: {path}") from err

    def load(self, path: Union[str, Path]) -> RasterImage:
        return self.decode(self.read_bytes(path), Path(path))

    @staticmethod
    def encode_png(image: RasterImage) -> bytes:
        """Serialize lossless PNG with alpha."""
        pixels = image.pixels
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)
        buffer = BytesIO()
        try:
            PILImage.fromarray(pixels).save(buffer, format="PNG")
        except (OSError, ValueError, TypeError) as err:
            raise EncodeError(f"PNG encoding failed: {err}") from err
        return buffer.getvalue()

    @staticmethod
    def save_bytes(data: bytes, path: Union[str, Path]) -> Path:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as err:
            raise EncodeError(f"Cannot write output {path}: {err}") from err
        return path

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image file paths one at a time, filtered by extension.
        Decoding is left to the caller so failures can be reported per file.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if not p.is_file():
                continue
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            yield p
