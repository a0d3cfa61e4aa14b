from __future__ import annotations

from dataclasses import dataclass, field, fields
import logging
from pathlib import Path
import tomllib
from typing import Any

from zoomplot.errors import PlotConfigError
from zoomplot.surface import RGBA, FontSpec, Stroke
from zoomplot.view_state import DEFAULT_LABEL_WARNING_THRESHOLD, DEFAULT_Y_RANGE


LOGGER = logging.getLogger(__name__)

BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)
GREEN: RGBA = (0, 255, 0, 255)
GRAY99: RGBA = (99, 99, 99, 255)


@dataclass(frozen=True)
class PlotStyle:
    background: RGBA = BLACK
    frame_color: RGBA = GRAY99
    frame_width: float = 1.0
    series_color: RGBA = GREEN
    series_width: float = 1.0
    tick_color: RGBA = WHITE
    label_color: RGBA = WHITE
    axis_margin_px: float = 40.0
    tick_length_px: float = 5.0
    label_offset_px: float = 15.0
    font: FontSpec = field(default_factory=FontSpec)

    @property
    def frame_stroke(self) -> Stroke:
        return Stroke(self.frame_width, self.frame_color)

    @property
    def series_stroke(self) -> Stroke:
        return Stroke(self.series_width, self.series_color)

    @property
    def tick_stroke(self) -> Stroke:
        return Stroke(1.0, self.tick_color)


@dataclass(frozen=True)
class InteractionConfig:
    default_y_range: tuple[float, float] = DEFAULT_Y_RANGE
    scroll_clamp: float = 10.0
    zoom_rate: float = 0.01
    label_warning_threshold: int = DEFAULT_LABEL_WARNING_THRESHOLD

    def __post_init__(self) -> None:
        if self.scroll_clamp <= 0:
            raise PlotConfigError("scroll_clamp must be > 0")
        if self.zoom_rate <= 0:
            raise PlotConfigError("zoom_rate must be > 0")
        if self.zoom_rate * self.scroll_clamp >= 1:
            raise PlotConfigError("zoom_rate * scroll_clamp must be < 1")
        if self.label_warning_threshold <= 0:
            raise PlotConfigError("label_warning_threshold must be > 0")


@dataclass(frozen=True)
class PlotConfig:
    style: PlotStyle = field(default_factory=PlotStyle)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)


_COLOR_KEYS = {"background", "frame_color", "series_color", "tick_color", "label_color"}


def load_plot_config(path: str | Path) -> PlotConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"plot config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise PlotConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    return parse_plot_config(raw)


def parse_plot_config(raw: dict[str, Any]) -> PlotConfig:
    for key in raw:
        if key not in {"style", "interaction"}:
            LOGGER.warning("ignoring unknown plot config table: %s", key)
    style_raw = _coerce_table(raw.get("style", {}), "style")
    interaction_raw = _coerce_table(raw.get("interaction", {}), "interaction")

    style_kwargs: dict[str, Any] = {}
    for key, value in _known_items(style_raw, PlotStyle, "style"):
        if key == "font":
            style_kwargs["font"] = _coerce_font(value)
        elif key in _COLOR_KEYS:
            style_kwargs[key] = _coerce_color(value, key)
        else:
            style_kwargs[key] = _coerce_float(value, key)

    interaction_kwargs: dict[str, Any] = {}
    for key, value in _known_items(interaction_raw, InteractionConfig, "interaction"):
        if key == "default_y_range":
            interaction_kwargs[key] = _coerce_range(value, key)
        elif key == "label_warning_threshold":
            if not isinstance(value, int) or isinstance(value, bool):
                raise PlotConfigError(f"{key} must be an integer")
            interaction_kwargs[key] = value
        else:
            interaction_kwargs[key] = _coerce_float(value, key)

    return PlotConfig(
        style=PlotStyle(**style_kwargs),
        interaction=InteractionConfig(**interaction_kwargs),
    )


def _coerce_table(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise PlotConfigError(f"[{name}] must be a table")
    return value


def _known_items(table: dict[str, Any], cls: type, name: str) -> list[tuple[str, Any]]:
    known = {f.name for f in fields(cls)}
    items: list[tuple[str, Any]] = []
    for key, value in table.items():
        if key not in known:
            LOGGER.warning("ignoring unknown key in [%s]: %s", name, key)
            continue
        items.append((key, value))
    return items


def _coerce_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PlotConfigError(f"{name} must be a number")
    return float(value)


def _coerce_color(value: Any, name: str) -> RGBA:
    if not isinstance(value, list) or len(value) not in (3, 4):
        raise PlotConfigError(f"{name} must be a list of 3 or 4 integers")
    channels: list[int] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
            raise PlotConfigError(f"{name} channels must be integers in 0..255")
        channels.append(item)
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])


def _coerce_range(value: Any, name: str) -> tuple[float, float]:
    if not isinstance(value, list) or len(value) != 2:
        raise PlotConfigError(f"{name} must be a list of two numbers")
    return (_coerce_float(value[0], name), _coerce_float(value[1], name))


def _coerce_font(value: Any) -> FontSpec:
    table = _coerce_table(value, "style.font")
    size = _coerce_float(table.get("size_px", FontSpec.size_px), "font.size_px")
    if size <= 0:
        raise PlotConfigError("font.size_px must be > 0")
    family = table.get("family", FontSpec.family)
    if family not in ("proportional", "monospace"):
        raise PlotConfigError("font.family must be `proportional` or `monospace`")
    return FontSpec(size_px=size, family=family)
