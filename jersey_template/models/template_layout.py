from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
from .composite_layer import CompositeLayer


@dataclass
class TemplateLayout:
    """
    Canvas size plus the layers to draw on it, bottom-most first
    (back → front → collar).
    """
    width: int
    height: int
    back_top: int
    front_top: int
    layers: List[CompositeLayer] = field(default_factory=list)
