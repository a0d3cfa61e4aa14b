from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> "ScreenPoint":
        return ScreenPoint(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")


@dataclass(frozen=True)
class Rect:
    """Axis-aligned screen rectangle; y grows downward, so `top` is `min_y`."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_min_size(cls, origin: ScreenPoint, size: Size) -> "Rect":
        return cls(origin.x, origin.y, origin.x + size.width, origin.y + size.height)

    @property
    def left(self) -> float:
        return self.min_x

    @property
    def right(self) -> float:
        return self.max_x

    @property
    def top(self) -> float:
        return self.min_y

    @property
    def bottom(self) -> float:
        return self.max_y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def x_range(self) -> tuple[float, float]:
        return (self.min_x, self.max_x)

    @property
    def y_range(self) -> tuple[float, float]:
        return (self.min_y, self.max_y)

    @property
    def center(self) -> ScreenPoint:
        return ScreenPoint((self.min_x + self.max_x) * 0.5, (self.min_y + self.max_y) * 0.5)

    def contains(self, point: ScreenPoint) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def shrink_left(self, px: float) -> "Rect":
        return Rect(self.min_x + px, self.min_y, self.max_x, self.max_y)

