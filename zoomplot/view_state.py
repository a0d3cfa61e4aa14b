from __future__ import annotations

from dataclasses import dataclass
import logging

from zoomplot.geometry import ScreenPoint


LOGGER = logging.getLogger(__name__)

DEFAULT_Y_RANGE = (-100.0, 100.0)
DEFAULT_LABEL_WARNING_THRESHOLD = 1024


@dataclass
class ViewState:
    y_start: float = DEFAULT_Y_RANGE[0]
    y_end: float = DEFAULT_Y_RANGE[1]
    last_pointer: ScreenPoint | None = None

    @property
    def y_range(self) -> tuple[float, float]:
        return (self.y_start, self.y_end)

    @property
    def span(self) -> float:
        return self.y_end - self.y_start

    def set_y_range(self, start: float, end: float) -> None:
        self.y_start = float(start)
        self.y_end = float(end)

    def pan_by(self, delta: float) -> None:
        self.y_start += delta
        self.y_end += delta

    def zoom_at(self, scroll_delta: float, bottom_distance: float, rate: float) -> None:
        """Zoom around a pointer sitting `bottom_distance` (0 bottom, 1 top) up the plot.

        The edge nearer the pointer moves less, so the value under the cursor stays put.
        """
        f = -rate * scroll_delta
        r = self.span
        self.y_start -= f * bottom_distance * r
        self.y_end += f * (1.0 - bottom_distance) * r

    def release_pointer(self) -> None:
        if self.last_pointer is not None:
            LOGGER.debug("drag released at %s", self.last_pointer)
        self.last_pointer = None


class ViewStateRegistry:
    """Owns one lazily created `ViewState` per plot label; entries are never evicted."""

    def __init__(
        self,
        default_y_range: tuple[float, float] = DEFAULT_Y_RANGE,
        label_warning_threshold: int = DEFAULT_LABEL_WARNING_THRESHOLD,
    ) -> None:
        if label_warning_threshold <= 0:
            raise ValueError("label_warning_threshold must be > 0")
        self._default_y_range = (float(default_y_range[0]), float(default_y_range[1]))
        self._label_warning_threshold = label_warning_threshold
        self._states: dict[str, ViewState] = {}
        self._warned = False

    @property
    def default_y_range(self) -> tuple[float, float]:
        return self._default_y_range

    def get_or_create(self, label: str) -> ViewState:
        state = self._states.get(label)
        if state is not None:
            return state
        state = ViewState(y_start=self._default_y_range[0], y_end=self._default_y_range[1])
        self._states[label] = state
        LOGGER.debug("created view state for %r with range %s", label, self._default_y_range)
        if not self._warned and len(self._states) > self._label_warning_threshold:
            self._warned = True
            LOGGER.warning(
                "view state registry holds %d labels (threshold %d); labels are never evicted",
                len(self._states),
                self._label_warning_threshold,
            )
        return state

    def get(self, label: str) -> ViewState | None:
        return self._states.get(label)

    def labels(self) -> list[str]:
        return sorted(self._states.keys())

    def __contains__(self, label: object) -> bool:
        return label in self._states

    def __len__(self) -> int:
        return len(self._states)
