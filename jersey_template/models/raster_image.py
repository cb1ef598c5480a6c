from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass
class RasterImage:
    """
    Simple data object: RGBA pixels (+ optional source path for bookkeeping).
    Decoding/encoding lives in ImageRepository, not here.
    """
    pixels: np.ndarray # Shape (H, W, 4), dtype uint8, RGBA order.
    path: Path | None = None # Source of the image.

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def channels(self) -> int:
        return int(self.pixels.shape[2])

    @property
    def alpha(self) -> np.ndarray:
        """(H, W) view of the alpha channel."""
        return self.pixels[:, :, 3]
