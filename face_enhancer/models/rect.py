from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def empty(cls) -> "Rect":
        """Zero-area sentinel meaning 'no region found'."""
        return cls(0, 0, 0, 0)

    @classmethod
    def from_xyxy(cls, x1, y1, x2, y2) -> "Rect":
        x1, y1, x2, y2 = (int(round(v)) for v in (x1, y1, x2, y2))
        return cls(x1, y1, x2 - x1, y2 - y1)

    @property
    def area(self) -> int:
        if self.width <= 0 or self.height <= 0:
            return 0
        return self.width * self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.area == 0

    def contains(self, other: "Rect") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def fits_in(self, img_width: int, img_height: int) -> bool:
        return (
            self.x >= 0 and self.y >= 0
            and self.width > 0 and self.height > 0
            and self.right <= img_width
            and self.bottom <= img_height
        )

    def clip_to(self, img_width: int, img_height: int) -> "Rect":
        """Intersect with the image bounds; returns the sentinel if nothing is left."""
        x1, y1 = max(0, self.x), max(0, self.y)
        x2, y2 = min(img_width, self.right), min(img_height, self.bottom)
        if x2 <= x1 or y2 <= y1:
            return Rect.empty()
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height
