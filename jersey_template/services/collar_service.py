from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
import logging
import math

import cv2

from ..config import TemplateConfig
from ..exceptions import CollarUnavailableError, DecodeError
from ..models.composite_layer import CompositeLayer
from ..models.raster_image import RasterImage
from .image_service import ImageService

logger = logging.getLogger(__name__)

CollarSource = Union[RasterImage, bytes, str, Path, None]


class CollarService:
    """
    Optional collar overlay: shrink by config.collar_scale and centre it
    horizontally. The vertical position depends on the final canvas height
    and is filled in by CompositingService.
    A missing or broken collar never fails the template, it is just skipped.
    """

    def __init__(self, config: TemplateConfig | None = None,
                 image_service: ImageService | None = None):
        self.config = config or TemplateConfig()
        self.image_service = image_service or ImageService(self.config)

    def prepare(self, source: CollarSource, canvas_width: int) -> Optional[CompositeLayer]:
        if source is None:
            logger.debug("No collar supplied, skipping")
            return None
        try:
            collar = self._load(source)
            return self._scale_and_place(collar, canvas_width)
        except CollarUnavailableError as err:
            logger.warning(f"Collar skipped: {err}")
            return None

    # ─── Internal helpers ──────────────────────────────────────────
    def _load(self, source: CollarSource) -> RasterImage:
        if isinstance(source, RasterImage):
            return source
        try:
            if isinstance(source, (bytes, bytearray)):
                return self.image_service.decode(bytes(source))
            path = Path(source)
            if not path.is_file():
                raise CollarUnavailableError(f"collar image not found: {path}")
            return self.image_service.load(path)
        except DecodeError as err:
            raise CollarUnavailableError(f"collar image unreadable: {err}") from err

    def _scale_and_place(self, collar: RasterImage, canvas_width: int) -> CompositeLayer:
        scale = self.config.collar_scale
        width = math.floor(collar.width * scale)
        height = math.floor(collar.height * scale)
        if width <= 0 or height <= 0:
            raise CollarUnavailableError(
                f"collar {collar.width}x{collar.height} too small to scale by {scale}"
            )

        try:
            scaled = self.image_service.resize(collar, width, height)
        except (cv2.error, ValueError) as err:
            raise CollarUnavailableError(f"collar resize failed: {err}") from err
        left = (canvas_width - width) // 2
        logger.info(f"Collar {collar.width}x{collar.height} -> {width}x{height}, left={left}")
        return CompositeLayer(image=scaled, top=0, left=left)
