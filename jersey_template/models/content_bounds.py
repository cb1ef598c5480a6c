from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ContentBounds:
    """
    Tightest rectangle around visible pixels. All four edges are inclusive
    pixel indices. "No content" is not a ContentBounds: scanners return None.
    """
    top: int
    bottom: int
    left: int
    right: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def is_degenerate(self) -> bool:
        """Single row/column boxes are never used for cropping."""
        return self.left >= self.right or self.top >= self.bottom

    def fills(self, width: int, height: int) -> bool:
        """True if the bounds already cover a width x height frame."""
        return (
            self.left == 0 and self.top == 0
            and self.right == width - 1 and self.bottom == height - 1
        )

    def as_box(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) with exclusive right/bottom, PIL style."""
        return self.left, self.top, self.right + 1, self.bottom + 1
