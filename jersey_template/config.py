from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os

from dotenv import load_dotenv

from .models.raster_image import RasterImage

# Load environment variables
load_dotenv()

DEFAULT_GAP = -18
DEFAULT_VALID_EXTS = ".png,.jpg,.jpeg,.gif,.webp"


def _env(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as err:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from err


@dataclass
class TemplateConfig:
    """
    Value-object holding every tunable of the template pipeline.

    gap                      signed px between back's bottom content row and
                             front's top content row (negative = overlap)
    alpha_threshold_strict   alpha cut-off when trimming the raw upload
    alpha_threshold_precise  alpha cut-off when measuring each stacked side
    trim_threshold           per-channel tolerance of the corner-colour trim
    """
    gap: int = DEFAULT_GAP
    collar: Optional[RasterImage] = None
    alpha_threshold_strict: int = 5
    alpha_threshold_precise: int = 1
    trim_threshold: int = 0
    collar_scale: float = 0.5
    collar_path: Optional[Path] = None
    max_image_pixels: int = 40_000_000
    valid_exts: set[str] = field(
        default_factory=lambda: set(DEFAULT_VALID_EXTS.split(","))
    )

    def __post_init__(self):
        for name in ("alpha_threshold_strict", "alpha_threshold_precise", "trim_threshold"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be within [0, 255], got {value}")
        if self.collar_scale <= 0:
            raise ValueError(f"collar_scale must be positive, got {self.collar_scale}")
        if self.max_image_pixels <= 0:
            raise ValueError(f"max_image_pixels must be positive, got {self.max_image_pixels}")

    @classmethod
    def from_env(cls) -> TemplateConfig:
        """Build a config from environment variables (.env honoured)."""
        collar_path = os.getenv("COLLAR_PATH")
        exts = os.getenv("VALID_IMAGE_EXTENSIONS", DEFAULT_VALID_EXTS)
        return cls(
            gap=_env("JERSEY_GAP", str(DEFAULT_GAP), int),
            alpha_threshold_strict=_env("ALPHA_THRESHOLD_STRICT", "5", int),
            alpha_threshold_precise=_env("ALPHA_THRESHOLD_PRECISE", "1", int),
            trim_threshold=_env("TRIM_THRESHOLD", "0", int),
            collar_scale=_env("COLLAR_SCALE", "0.5", float),
            collar_path=Path(collar_path) if collar_path else None,
            max_image_pixels=_env("MAX_IMAGE_PIXELS", "40000000", int),
            valid_exts={e.strip().lower() for e in exts.split(",") if e.strip()},
        )
