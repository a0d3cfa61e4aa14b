from __future__ import annotations

import math

import numpy as np

from zoomplot.raster.canvas import ClipBox, draw_pixel, intersect_clip
from zoomplot.surface import RGBA


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1, clip: ClipBox | None = None) -> None:
    if xs.size < 2:
        return
    for i in range(xs.size - 1):
        draw_line_segment(dst, float(xs[i]), float(ys[i]), float(xs[i + 1]), float(ys[i + 1]), color=color, width=width, clip=clip)


def draw_line_segment(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: RGBA,
    width: int = 1,
    clip: ClipBox | None = None,
) -> None:
    if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
        return
    box = intersect_clip(dst, clip)
    if box is None:
        return
    pad = max(0, width // 2)
    clipped = _clip_segment(x0, y0, x1, y1, (box[0] - pad, box[1] - pad, box[2] + pad, box[3] + pad))
    if clipped is None:
        return
    _rasterize(dst, *(int(round(v)) for v in clipped), color=color, width=width, clip=box)


def _clip_segment(x0: float, y0: float, x1: float, y1: float, box: ClipBox) -> tuple[float, float, float, float] | None:
    # Liang-Barsky; keeps the Bresenham walk bounded when samples map far off screen.
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - box[0]), (dx, box[2] - x0), (-dy, y0 - box[1]), (dy, box[3] - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


def _rasterize(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int, clip: ClipBox) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width, clip=clip)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int, clip: ClipBox) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color, clip=clip)
