from __future__ import annotations

from collections.abc import Sequence
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image

from zoomplot.geometry import Rect, ScreenPoint, Size
from zoomplot.input import FrameInput
from zoomplot.raster.canvas import ClipBox, fill_rect, new_canvas, stroke_rect
from zoomplot.raster.draw_lines import draw_line_segment, draw_polyline
from zoomplot.raster.draw_text import draw_text
from zoomplot.surface import RGBA, Anchor, DrawingRegion, FontSpec, Stroke


LOGGER = logging.getLogger(__name__)


def rect_to_clip(rect: Rect) -> ClipBox:
    return (
        int(math.floor(rect.min_x)),
        int(math.floor(rect.min_y)),
        int(math.ceil(rect.max_x)) - 1,
        int(math.ceil(rect.max_y)) - 1,
    )


def _stroke_px(stroke: Stroke) -> int:
    if stroke.width <= 0:
        return 0
    return max(1, int(round(stroke.width)))


class RasterSurface:
    """Pointer view of one region; drags count only when the press started inside it."""

    def __init__(self, frame_input: FrameInput, region_rect: Rect) -> None:
        self._input = frame_input
        self._rect = region_rect

    def pointer_pressed_position(self) -> ScreenPoint | None:
        inp = self._input
        if not inp.pressed or inp.pointer is None or inp.press_origin is None:
            return None
        if not self._rect.contains(inp.press_origin):
            return None
        return inp.pointer

    def pointer_hover_position_if_inside(self, rect: Rect) -> ScreenPoint | None:
        pointer = self._input.pointer
        if pointer is None or not rect.contains(pointer):
            return None
        return pointer

    def vertical_scroll_delta(self) -> float:
        return self._input.scroll_delta_y


class RasterPainter:
    def __init__(self, canvas: np.ndarray, region_rect: Rect) -> None:
        self._canvas = canvas
        self._region_clip = rect_to_clip(region_rect)
        self._clip: ClipBox = self._region_clip

    @property
    def clip(self) -> ClipBox:
        return self._clip

    def set_clip(self, rect: Rect) -> None:
        x0, y0, x1, y1 = rect_to_clip(rect)
        rx0, ry0, rx1, ry1 = self._region_clip
        self._clip = (max(x0, rx0), max(y0, ry0), min(x1, rx1), min(y1, ry1))

    def draw_rect(self, rect: Rect, fill: RGBA, stroke: Stroke) -> None:
        x0, y0, x1, y1 = rect_to_clip(rect)
        fill_rect(self._canvas, x0, y0, x1, y1, fill, clip=self._clip)
        width = _stroke_px(stroke)
        if width > 0:
            stroke_rect(self._canvas, x0, y0, x1, y1, stroke.color, width=width, clip=self._clip)

    def draw_line_segment(self, p0: ScreenPoint, p1: ScreenPoint, stroke: Stroke) -> None:
        width = _stroke_px(stroke)
        if width == 0:
            return
        draw_line_segment(self._canvas, p0.x, p0.y, p1.x, p1.y, stroke.color, width=width, clip=self._clip)

    def draw_text(self, pos: ScreenPoint, anchor: Anchor, text: str, font: FontSpec, color: RGBA) -> None:
        draw_text(
            self._canvas,
            pos.x,
            pos.y,
            text,
            color,
            anchor=anchor,
            font_family=font.family,
            font_size_px=font.size_px,
            clip=self._clip,
        )

    def draw_polyline(self, points: Sequence[ScreenPoint], stroke: Stroke) -> None:
        width = _stroke_px(stroke)
        if width == 0 or len(points) < 2:
            return
        xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
        ys = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
        draw_polyline(self._canvas, xs, ys, stroke.color, width=width, clip=self._clip)


class RasterHost:
    """Software framebuffer host that stacks fixed-size regions top to bottom.

    A region keeps the slot it was first given for as long as the host lives, so a
    plot label maps to the same screen rectangle on every frame.
    """

    def __init__(self, width: int, height: int, *, background: RGBA = (0, 0, 0, 255), spacing_px: int = 4) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        if spacing_px < 0:
            raise ValueError("spacing_px must be >= 0")
        self.width = width
        self.height = height
        self.background = background
        self.spacing_px = spacing_px
        self._canvas = new_canvas(width, height, background)
        self._slots: dict[str, ScreenPoint] = {}
        self._sizes: dict[str, Size] = {}
        self._next_y = 0.0
        self._input: FrameInput | None = None

    @property
    def canvas(self) -> np.ndarray:
        return self._canvas

    def region_ids(self) -> list[str]:
        return list(self._slots.keys())

    def begin_frame(self, frame_input: FrameInput | None = None) -> None:
        self._canvas[:, :, 0] = self.background[0]
        self._canvas[:, :, 1] = self.background[1]
        self._canvas[:, :, 2] = self.background[2]
        self._canvas[:, :, 3] = self.background[3]
        self._input = frame_input or FrameInput()

    def end_frame(self) -> np.ndarray:
        if self._input is None:
            raise RuntimeError("end_frame called without begin_frame")
        self._input = None
        return self._canvas.copy()

    def allocate_drawing_region(self, region_id: str, size: Size) -> DrawingRegion:
        if self._input is None:
            raise RuntimeError("allocate_drawing_region called outside begin_frame/end_frame")
        origin = self._slots.get(region_id)
        if origin is None:
            origin = ScreenPoint(0.0, self._next_y)
            self._slots[region_id] = origin
            self._next_y += size.height + self.spacing_px
            LOGGER.debug("allocated region %r at %s size %s", region_id, origin, size)
        elif self._sizes[region_id] != size:
            raise ValueError(f"region {region_id!r} was allocated at {self._sizes[region_id]}, cannot resize to {size}")
        self._sizes[region_id] = size
        rect = Rect.from_min_size(origin, size)
        return DrawingRegion(
            rect=rect,
            surface=RasterSurface(self._input, rect),
            painter=RasterPainter(self._canvas, rect),
        )

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._canvas)

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        self.to_image().save(out, format="PNG")
        return out
