from __future__ import annotations
from typing import Optional
import logging

import numpy as np

from ..models.content_bounds import ContentBounds
from ..models.raster_image import RasterImage

logger = logging.getLogger(__name__)


class BoundsService:
    """
    Finds where the visible part of an image is.

    A pixel is content when its alpha is strictly greater than the threshold.
    Edges are found the same way an edge-inward scan would find them:
      • top / bottom: first row from each end with any content pixel
      • left / right: first column from each end with a content pixel,
        looking only at rows top..bottom
    """

    @staticmethod
    def content_mask(img: RasterImage, threshold: int) -> np.ndarray:
        """(H, W) bool mask of pixels with alpha > threshold."""
        return img.alpha > threshold

    def find_content_bounds(self, img: RasterImage, threshold: int) -> Optional[ContentBounds]:
        """
        Args:
            img (RasterImage): RGBA image to scan.
            threshold (int): alpha values at or below this count as empty.

        Returns:
            ContentBounds with inclusive edges, or None if no pixel qualifies.
        """
        mask = self.content_mask(img, threshold)

        rows = np.flatnonzero(mask.any(axis=1))
        if rows.size == 0:
            logger.debug(f"No content above alpha {threshold} in {img.width}x{img.height} image")
            return None
        top, bottom = int(rows[0]), int(rows[-1])

        cols = np.flatnonzero(mask[top:bottom + 1].any(axis=0))
        left, right = int(cols[0]), int(cols[-1])

        bounds = ContentBounds(top=top, bottom=bottom, left=left, right=right)
        logger.debug(f"Content bounds (alpha > {threshold}): {bounds}")
        return bounds
