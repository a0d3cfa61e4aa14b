from __future__ import annotations

from collections.abc import Sequence
import logging
import math
from typing import Any

import numpy as np

from zoomplot.errors import PlotDataError
from zoomplot.geometry import Rect


LOGGER = logging.getLogger(__name__)

TICK_INTERVALS = 4

Interval = tuple[float, float]


def remap(value: float, domain: Interval, target: Interval) -> float:
    d0, d1 = domain
    r0, r1 = target
    if d1 == d0:
        LOGGER.debug("degenerate remap domain %r; using target midpoint", domain)
        return (r0 + r1) * 0.5
    return r0 + (value - d0) / (d1 - d0) * (r1 - r0)


def remap_array(values: np.ndarray, domain: Interval, target: Interval) -> np.ndarray:
    d0, d1 = float(domain[0]), float(domain[1])
    r0, r1 = float(target[0]), float(target[1])
    vals = np.asarray(values, dtype=np.float64)
    if d1 == d0:
        return np.full(vals.shape, (r0 + r1) * 0.5, dtype=np.float64)
    return r0 + (vals - d0) / (d1 - d0) * (r1 - r0)


def value_to_screen_y(value: float, y_range: Interval, rect: Rect) -> float:
    # Domain is reversed against (top, bottom) so larger values sit higher on screen.
    y_start, y_end = y_range
    return remap(value, (y_end, y_start), rect.y_range)


def screen_y_to_value(py: float, y_range: Interval, rect: Rect) -> float:
    y_start, y_end = y_range
    return remap(py, rect.y_range, (y_end, y_start))


def index_to_screen_x(index: float, sample_count: int, rect: Rect) -> float:
    return remap(index, (0.0, float(sample_count)), rect.x_range)


def screen_x_to_index(px: float, sample_count: int, rect: Rect) -> float:
    return remap(px, rect.x_range, (0.0, float(sample_count)))


def coerce_samples(samples: Any) -> np.ndarray:
    if isinstance(samples, np.ndarray):
        arr = samples
    elif isinstance(samples, Sequence) and not isinstance(samples, (str, bytes, bytearray)):
        if len(samples) == 0:
            return np.empty((0, 2), dtype=np.float64)
        try:
            arr = np.asarray([(float(p[0]), float(p[1])) for p in samples], dtype=np.float64)
        except (TypeError, ValueError, IndexError) as exc:
            raise PlotDataError("samples must be a sequence of (x, y) pairs") from exc
    else:
        raise PlotDataError(f"unsupported samples input type: {type(samples)!r}")

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise PlotDataError(f"samples must have shape (N, 2), got {arr.shape}")
    if arr.dtype.kind not in {"i", "u", "f"}:
        raise PlotDataError(f"samples must be numeric, got dtype {arr.dtype}")
    return arr.astype(np.float64, copy=False)


def map_samples(samples: np.ndarray, sample_count: int, y_range: Interval, rect: Rect) -> tuple[np.ndarray, np.ndarray]:
    y_start, y_end = y_range
    px = remap_array(samples[:, 0], (0.0, float(sample_count)), rect.x_range)
    py = remap_array(samples[:, 1], (y_end, y_start), rect.y_range)
    return px, py


def tick_values(start: float, end: float) -> list[float]:
    step = (end - start) / TICK_INTERVALS
    if step == 0 or not math.isfinite(step):
        return [start]
    # Index-based so the final tick lands on `end` instead of drifting past it.
    return [start + k * step for k in range(TICK_INTERVALS + 1)]


def format_tick_label(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    out = f"{value:.0f}"
    if out == "-0":
        out = "0"
    return out
