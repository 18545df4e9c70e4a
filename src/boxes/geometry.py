"""
Points and axis-aligned boxes.

Same convention as the drawing surface: a Rect is stored by its centre and its size,
the origin sits in the middle of the window and y grows upwards (so 'top' is the larger y value).
"""

import math
from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_x_y_w_h(cls, x: float, y: float, w: float, h: float) -> Self:
        return cls(x, y, w, h)

    @property
    def center(self) -> Point:
        return Point(self.x, self.y)

    @property
    def left(self) -> float:
        return self.x - self.w / 2

    @property
    def right(self) -> float:
        return self.x + self.w / 2

    @property
    def top(self) -> float:
        return self.y + self.h / 2

    @property
    def bottom(self) -> float:
        return self.y - self.h / 2

    def contains(self, point: Point) -> bool:
        """Edges count as inside."""
        return (self.left <= point.x <= self.right) and (
            self.bottom <= point.y <= self.top
        )
