from __future__ import annotations
from dataclasses import replace
from typing import Optional
import logging

import numpy as np
from PIL import Image as PILImage

from ..exceptions import UnsupportedContentError
from ..models.composite_layer import CompositeLayer
from ..models.content_bounds import ContentBounds
from ..models.raster_image import RasterImage
from ..models.template_layout import TemplateLayout
from .image_service import ImageService

logger = logging.getLogger(__name__)


class CompositingService:
    """
    Stacks the mirrored back above the front so that their *content* edges,
    not their buffer edges, sit exactly `gap` px apart, then draws
    everything onto a transparent canvas.

    gap < 0  → content overlaps by |gap| rows
    gap = 0  → content rows touch
    gap > 0  → |gap| empty rows between them
    """

    def __init__(self, image_service: ImageService | None = None):
        self.image_service = image_service or ImageService()

    # ─── Public API ────────────────────────────────────────────────
    def plan_layout(
        self,
        front: RasterImage,
        back: RasterImage,
        front_bounds: Optional[ContentBounds],
        back_bounds: Optional[ContentBounds],
        gap: int,
        collar: Optional[CompositeLayer] = None,
    ) -> TemplateLayout:
        """
        Work out canvas size and layer offsets. No pixels are touched.

        Raises:
            UnsupportedContentError: a side has no visible content, so there
                is no edge to align on.
        """
        if front_bounds is None or back_bounds is None:
            raise UnsupportedContentError(
                "Jersey image has no visible content to stack (fully transparent?)"
            )

        # Back content starts on row 0
        back_top = -back_bounds.top
        back_bottom_y = back_top + back_bounds.bottom
        # gap counts empty rows between the two content regions: the +1 makes
        # gap = 0 start the front on the row after back_bottom_y (touching,
        # no shared row), and gap = -18 overlap exactly 18 rows
        front_top = back_bottom_y + 1 + gap - front_bounds.top

        # Overlap larger than the back itself would push front content above row 0
        shift = max(0, -(front_top + front_bounds.top))
        if shift:
            logger.info(f"Gap {gap} overlaps past the back side, shifting stack down {shift}px")
            back_top += shift
            front_top += shift

        total_height = front_top + front_bounds.bottom + 1
        width = front.width

        layers = [
            CompositeLayer(image=back, top=back_top, left=0),
            CompositeLayer(image=front, top=front_top, left=0),
        ]
        if collar is not None:
            # Only valid now that total_height is final
            layers.append(replace(collar, top=(total_height - collar.image.height) // 2))

        logger.info(
            f"Positioning: gap={gap}, back_top={back_top}, front_top={front_top}, "
            f"canvas={width}x{total_height}"
        )
        return TemplateLayout(width=width, height=total_height,
                              back_top=back_top, front_top=front_top, layers=layers)

    def render(self, layout: TemplateLayout) -> RasterImage:
        """Alpha-over every layer, in order, onto a fully transparent canvas."""
        size = (layout.width, layout.height)
        canvas = PILImage.new("RGBA", size, (0, 0, 0, 0))
        for layer in layout.layers:
            overlay = PILImage.new("RGBA", size, (0, 0, 0, 0))
            # paste() clips anything falling outside the canvas
            overlay.paste(self._to_pil(layer.image), (layer.left, layer.top))
            canvas = PILImage.alpha_composite(canvas, overlay)
        return self.image_service.create_image(np.array(canvas, dtype=np.uint8))

    def compose(
        self,
        front: RasterImage,
        back: RasterImage,
        front_bounds: Optional[ContentBounds],
        back_bounds: Optional[ContentBounds],
        gap: int,
        collar: Optional[CompositeLayer] = None,
    ) -> bytes:
        """Plan, render and encode the template as PNG bytes."""
        layout = self.plan_layout(front, back, front_bounds, back_bounds, gap, collar)
        canvas = self.render(layout)
        return self.image_service.encode_png(canvas)

    # ─── Internal helpers ──────────────────────────────────────────
    @staticmethod
    def _to_pil(img: RasterImage) -> PILImage.Image:
        pixels = img.pixels
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)
        return PILImage.fromarray(pixels)
