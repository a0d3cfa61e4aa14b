from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from zoomplot.config import InteractionConfig, PlotConfig, PlotStyle
from zoomplot.geometry import Rect, ScreenPoint, Size
from zoomplot.scales import (
    coerce_samples,
    format_tick_label,
    map_samples,
    screen_y_to_value,
    tick_values,
    value_to_screen_y,
)
from zoomplot.surface import DrawingHost, InteractiveSurface, Painter
from zoomplot.view_state import ViewState, ViewStateRegistry


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlotFrame:
    canvas_rect: Rect
    plot_rect: Rect
    y_range: tuple[float, float]
    ticks: tuple[float, ...]
    points: int


class PlotContext:
    """Entry point for immediate-mode plots; owns the per-label view state registry."""

    def __init__(self, registry: ViewStateRegistry | None = None, config: PlotConfig | None = None) -> None:
        self._config = config if config is not None else PlotConfig()
        interaction = self._config.interaction
        self._registry = registry if registry is not None else ViewStateRegistry(
            default_y_range=interaction.default_y_range,
            label_warning_threshold=interaction.label_warning_threshold,
        )

    @property
    def registry(self) -> ViewStateRegistry:
        return self._registry

    @property
    def config(self) -> PlotConfig:
        return self._config

    def acquire(self, label: str) -> ViewState:
        return self._registry.get_or_create(label)

    def plot(self, label: str, size: Size | tuple[float, float], sample_count: int, show_yticks: bool) -> "PlotHandle":
        if not isinstance(size, Size):
            size = Size(float(size[0]), float(size[1]))
        return PlotHandle(
            label=label,
            state=self.acquire(label),
            size=size,
            sample_count=sample_count,
            show_yticks=show_yticks,
            style=self._config.style,
            interaction=self._config.interaction,
        )


class PlotHandle:
    """One-shot plot request bound to a label's view state for a single frame."""

    def __init__(
        self,
        *,
        label: str,
        state: ViewState,
        size: Size,
        sample_count: int,
        show_yticks: bool,
        style: PlotStyle,
        interaction: InteractionConfig,
    ) -> None:
        if sample_count < 0:
            raise ValueError("sample_count must be >= 0")
        if show_yticks and size.width <= style.axis_margin_px:
            raise ValueError(f"width must exceed the {style.axis_margin_px:g}px tick label margin when ticks are shown")
        self.label = label
        self.size = size
        self.sample_count = int(sample_count)
        self.show_yticks = bool(show_yticks)
        self._state = state
        self._style = style
        self._interaction = interaction
        self._shown = False

    @property
    def state(self) -> ViewState:
        return self._state

    def set_y_range(self, start: float, end: float) -> "PlotHandle":
        self._state.set_y_range(start, end)
        return self

    def show(self, host: DrawingHost, samples: Any) -> PlotFrame:
        if self._shown:
            raise RuntimeError(f"plot handle for {self.label!r} was already shown")
        self._shown = True
        data = coerce_samples(samples)

        region = host.allocate_drawing_region(self.label, self.size)
        canvas_rect = region.rect
        plot_rect = canvas_rect.shrink_left(self._style.axis_margin_px) if self.show_yticks else canvas_rect
        painter = region.painter
        painter.draw_rect(plot_rect, self._style.background, self._style.frame_stroke)

        self._apply_drag(region.surface, plot_rect)
        self._apply_zoom(region.surface, plot_rect)

        ticks: tuple[float, ...] = ()
        if self.show_yticks:
            ticks = tuple(tick_values(self._state.y_start, self._state.y_end))
            self._draw_ticks(painter, plot_rect, ticks)

        painter.set_clip(plot_rect)
        px, py = map_samples(data, self.sample_count, self._state.y_range, plot_rect)
        points = [ScreenPoint(float(x), float(y)) for x, y in zip(px.tolist(), py.tolist(), strict=True)]
        painter.draw_polyline(points, self._style.series_stroke)

        return PlotFrame(
            canvas_rect=canvas_rect,
            plot_rect=plot_rect,
            y_range=self._state.y_range,
            ticks=ticks,
            points=len(points),
        )

    def _apply_drag(self, surface: InteractiveSurface, plot_rect: Rect) -> None:
        state = self._state
        pointer = surface.pointer_pressed_position()
        if pointer is None:
            state.release_pointer()
            return
        # Both ends are mapped with the range as it was before this frame's update.
        y_range = state.y_range
        y_now = screen_y_to_value(pointer.y, y_range, plot_rect)
        if state.last_pointer is not None:
            y_prev = screen_y_to_value(state.last_pointer.y, y_range, plot_rect)
            state.pan_by(y_prev - y_now)
        state.last_pointer = pointer

    def _apply_zoom(self, surface: InteractiveSurface, plot_rect: Rect) -> None:
        limit = self._interaction.scroll_clamp
        scrolled = max(-limit, min(limit, float(surface.vertical_scroll_delta())))
        pos = surface.pointer_hover_position_if_inside(plot_rect)
        if pos is None or scrolled == 0.0:
            return
        if plot_rect.height <= 0:
            return
        bottom_distance = (plot_rect.bottom - pos.y) / plot_rect.height
        self._state.zoom_at(scrolled, bottom_distance, self._interaction.zoom_rate)
        LOGGER.debug("zoomed %r by %.2f at %.3f -> %s", self.label, scrolled, bottom_distance, self._state.y_range)

    def _draw_ticks(self, painter: Painter, plot_rect: Rect, ticks: tuple[float, ...]) -> None:
        style = self._style
        for tick in ticks:
            tk = ScreenPoint(plot_rect.left, value_to_screen_y(tick, self._state.y_range, plot_rect))
            painter.draw_line_segment(tk, tk.offset(dx=style.tick_length_px), style.tick_stroke)
            painter.draw_text(
                tk.offset(dx=-style.label_offset_px),
                "right_center",
                format_tick_label(tick),
                style.font,
                style.label_color,
            )
