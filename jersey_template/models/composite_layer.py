from __future__ import annotations
from dataclasses import dataclass
from .raster_image import RasterImage


@dataclass
class CompositeLayer:
    """
    One image placed on the template canvas. Offsets are canvas coordinates
    of the image's top-left corner and may be negative (clipped on render).
    """
    image: RasterImage
    top: int
    left: int = 0
