from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Protocol

from zoomplot.geometry import Rect, ScreenPoint, Size


RGBA = tuple[int, int, int, int]

Anchor = Literal[
    "left_top",
    "center_top",
    "right_top",
    "left_center",
    "center_center",
    "right_center",
    "left_bottom",
    "center_bottom",
    "right_bottom",
]

FontFamily = Literal["proportional", "monospace"]


@dataclass(frozen=True)
class Stroke:
    width: float
    color: RGBA


@dataclass(frozen=True)
class FontSpec:
    size_px: float = 10.0
    family: FontFamily = "proportional"


class InteractiveSurface(Protocol):
    def pointer_pressed_position(self) -> ScreenPoint | None:
        ...

    def pointer_hover_position_if_inside(self, rect: Rect) -> ScreenPoint | None:
        ...

    def vertical_scroll_delta(self) -> float:
        ...


class Painter(Protocol):
    def draw_rect(self, rect: Rect, fill: RGBA, stroke: Stroke) -> None:
        ...

    def draw_line_segment(self, p0: ScreenPoint, p1: ScreenPoint, stroke: Stroke) -> None:
        ...

    def draw_text(self, pos: ScreenPoint, anchor: Anchor, text: str, font: FontSpec, color: RGBA) -> None:
        ...

    def draw_polyline(self, points: Sequence[ScreenPoint], stroke: Stroke) -> None:
        ...

    def set_clip(self, rect: Rect) -> None:
        ...


@dataclass(frozen=True)
class DrawingRegion:
    rect: Rect
    surface: InteractiveSurface
    painter: Painter


class DrawingHost(Protocol):
    """Immediate-mode collaborator that hands out fixed-size regions keyed by a stable id."""

    def allocate_drawing_region(self, region_id: str, size: Size) -> DrawingRegion:
        ...
