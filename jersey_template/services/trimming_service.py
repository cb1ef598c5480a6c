from __future__ import annotations
import logging

from ..config import TemplateConfig
from ..models.raster_image import RasterImage
from .bounds_service import BoundsService
from .image_service import ImageService

logger = logging.getLogger(__name__)


class TrimmingService:
    """
    Removes empty padding around the jersey.

    Two tiers:
      1. corner-colour border trim (cheap, handles solid backgrounds)
      2. alpha bounds scan, used only when tier 1 removed nothing
    The image comes back untouched when neither finds anything to cut.
    """

    def __init__(self, config: TemplateConfig | None = None,
                 image_service: ImageService | None = None,
                 bounds_service: BoundsService | None = None):
        self.config = config or TemplateConfig()
        self.image_service = image_service or ImageService(self.config)
        self.bounds_service = bounds_service or BoundsService()

    def trim(self, img: RasterImage, threshold: int | None = None) -> RasterImage:
        """
        Args:
            img (RasterImage): decoded upload.
            threshold (int): alpha cut-off for the bounds scan; defaults to
                the config's strict threshold.

        Returns:
            RasterImage: the cropped image, or img itself if nothing was cut.
        """
        if threshold is None:
            threshold = self.config.alpha_threshold_strict

        trimmed = self.image_service.trim_uniform_border(img, self.config.trim_threshold)
        if (trimmed.width, trimmed.height) != (img.width, img.height):
            logger.info(f"Border trim: {img.width}x{img.height} -> {trimmed.width}x{trimmed.height}")
            return trimmed

        logger.info("Border trim did not reduce size, scanning alpha for content bounds")
        bounds = self.bounds_service.find_content_bounds(img, threshold)
        if bounds is None or bounds.is_degenerate:
            logger.info(f"No croppable content found (bounds={bounds}), keeping original")
            return img
        if bounds.fills(img.width, img.height):
            logger.info("Content fills entire image, no trimming needed")
            return img

        cropped = self.image_service.extract(img, bounds)
        logger.info(f"Alpha trim: {img.width}x{img.height} -> {cropped.width}x{cropped.height}")
        return cropped
