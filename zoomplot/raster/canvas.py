from __future__ import annotations

import numpy as np

from zoomplot.surface import RGBA


# Inclusive pixel bounds (x0, y0, x1, y1).
ClipBox = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def full_clip(dst: np.ndarray) -> ClipBox:
    return (0, 0, dst.shape[1] - 1, dst.shape[0] - 1)


def intersect_clip(dst: np.ndarray, clip: ClipBox | None) -> ClipBox | None:
    fx0, fy0, fx1, fy1 = full_clip(dst)
    if clip is None:
        return (fx0, fy0, fx1, fy1)
    x0 = max(fx0, clip[0])
    y0 = max(fy0, clip[1])
    x1 = min(fx1, clip[2])
    y1 = min(fy1, clip[3])
    if x0 > x1 or y0 > y1:
        return None
    return (x0, y0, x1, y1)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA, clip: ClipBox | None = None) -> None:
    box = intersect_clip(dst, clip)
    if box is None or x < box[0] or x > box[2] or y < box[1] or y > box[3]:
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = 255


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, clip: ClipBox | None = None) -> None:
    box = intersect_clip(dst, clip)
    if box is None:
        return
    xa = max(box[0], min(x0, x1))
    xb = min(box[2], max(x0, x1))
    ya = max(box[1], min(y0, y1))
    yb = min(box[3], max(y0, y1))
    if xa > xb or ya > yb:
        return
    patch = dst[ya : yb + 1, xa : xb + 1]
    a = color[3] / 255.0
    inv = 1.0 - a
    patch[:, :, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + patch[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    patch[:, :, 3] = 255


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, clip: ClipBox | None = None) -> None:
    fill_rect(dst, x0, y, x1, y, color, clip=clip)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, clip: ClipBox | None = None) -> None:
    fill_rect(dst, x, y0, x, y1, color, clip=clip)


def stroke_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1, clip: ClipBox | None = None) -> None:
    for inset in range(max(0, width)):
        xa, ya, xb, yb = x0 + inset, y0 + inset, x1 - inset, y1 - inset
        if xa > xb or ya > yb:
            return
        draw_hline(dst, xa, xb, ya, color, clip=clip)
        draw_hline(dst, xa, xb, yb, color, clip=clip)
        draw_vline(dst, xa, ya, yb, color, clip=clip)
        draw_vline(dst, xb, ya, yb, color, clip=clip)
