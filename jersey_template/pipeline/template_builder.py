"""
Jersey Template Pipeline
Turns one front-facing jersey image into a two-sided printable template:
trim padding → mirror for the back → stack on content edges → add collar.
"""
from __future__ import annotations
from dataclasses import replace
from pathlib import Path
from typing import Union
import logging

from ..config import TemplateConfig
from ..repositories.image_repository import ImageRepository
from ..services.bounds_service import BoundsService
from ..services.collar_service import CollarService, CollarSource
from ..services.compositing_service import CompositingService
from ..services.image_service import ImageService
from ..services.trimming_service import TrimmingService

logger = logging.getLogger(__name__)


def build_template(
    front_bytes: bytes,
    collar: CollarSource = None,
    gap: int | None = None,
    config: TemplateConfig | None = None,
) -> bytes:
    """
    Build the template from raw image bytes.

    Args:
        front_bytes: PNG/JPEG/GIF/WEBP bytes of the front of the jersey.
        collar: optional overlay (bytes, path or RasterImage). Falls back to
            config.collar, then config.collar_path.
        gap: signed seam gap in px; defaults to config.gap.
        config: pipeline settings; defaults to TemplateConfig().

    Returns:
        bytes: PNG with alpha.

    Raises:
        TemplateError: DecodeError, UnsupportedContentError or EncodeError.
    """
    config = config or TemplateConfig()
    if gap is None:
        gap = config.gap
    if collar is None:
        collar = config.collar if config.collar is not None else config.collar_path

    image_service = ImageService(config)
    bounds_service = BoundsService()
    trimming_service = TrimmingService(config, image_service, bounds_service)
    collar_service = CollarService(config, image_service)
    compositing_service = CompositingService(image_service)

    # 1. Decode and trim the padding
    original = image_service.decode(front_bytes)
    logger.info(f"Original dimensions: {original.width}x{original.height}")
    front = trimming_service.trim(original, config.alpha_threshold_strict)
    logger.info(f"Trimmed dimensions (jersey only): {front.width}x{front.height}")

    # 2. The back is the trimmed front, flipped
    back = image_service.mirror(front)

    # 3. Precise content edges per side for the seam
    back_bounds = bounds_service.find_content_bounds(back, config.alpha_threshold_precise)
    front_bounds = bounds_service.find_content_bounds(front, config.alpha_threshold_precise)
    logger.info(f"Back side content: {back_bounds}")
    logger.info(f"Front side content: {front_bounds}")

    # 4. Optional collar, horizontally centred on the trimmed width
    collar_layer = collar_service.prepare(collar, front.width)

    # 5. Stack and encode
    output = compositing_service.compose(front, back, front_bounds, back_bounds, gap, collar_layer)
    logger.info(f"Jersey template created ({len(output)} bytes, collar={'yes' if collar_layer else 'no'})")
    return output


def build_template_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    *,
    collar: CollarSource = None,
    gap: int | None = None,
    config: TemplateConfig | None = None,
    use_collar: bool = True,
) -> Path:
    """File-to-file wrapper around build_template. Returns the output path."""
    config = config or TemplateConfig()
    if not use_collar:
        config = replace(config, collar=None, collar_path=None)
        collar = None

    repository = ImageRepository(max_pixels=config.max_image_pixels, valid_exts=config.valid_exts)
    front_bytes = repository.read_bytes(input_path)
    logger.info(f"Processing image: {input_path}")
    output = build_template(front_bytes, collar=collar, gap=gap, config=config)
    saved = repository.save_bytes(output, output_path)
    logger.info(f"Saved template to {saved}")
    return saved
