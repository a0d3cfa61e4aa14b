from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import logging
from typing import Literal

from zoomplot.geometry import ScreenPoint


LOGGER = logging.getLogger(__name__)

HDIDevice = Literal["keyboard", "mouse", "trackpad"]
HDIStatus = Literal["OK", "NOT_DETECTED", "UNAVAILABLE", "DENIED"]

PRIMARY_BUTTON = 0


@dataclass(frozen=True)
class HDIEvent:
    event_id: int
    ts_ns: int
    device: HDIDevice
    event_type: str
    status: HDIStatus
    payload: object | None


@dataclass(frozen=True)
class FrameInput:
    pointer: ScreenPoint | None = None
    pressed: bool = False
    press_origin: ScreenPoint | None = None
    scroll_delta_y: float = 0.0


class PointerTracker:
    """Folds pointer, click and scroll events into the per-frame input snapshot.

    Pointer position and button state persist across frames; the scroll delta is
    accumulated per frame and reset by `take_frame`.
    """

    def __init__(self) -> None:
        self._pointer: ScreenPoint | None = None
        self._pressed = False
        self._press_origin: ScreenPoint | None = None
        self._scroll_delta_y = 0.0

    def feed(self, events: Iterable[HDIEvent]) -> int:
        consumed = 0
        for event in events:
            if event.status != "OK" or not isinstance(event.payload, Mapping):
                continue
            payload = event.payload
            if event.event_type == "pointer_move":
                self._update_pointer(payload)
            elif event.event_type == "click":
                self._update_pointer(payload)
                if int(payload.get("button", -1)) != PRIMARY_BUTTON:
                    continue
                phase = str(payload.get("phase", ""))
                if phase == "down":
                    self._pressed = True
                    self._press_origin = self._pointer
                elif phase == "up":
                    self._pressed = False
                    self._press_origin = None
            elif event.event_type == "scroll":
                self._update_pointer(payload)
                self._scroll_delta_y += float(payload.get("delta_y", 0.0))
            else:
                continue
            consumed += 1
        return consumed

    def take_frame(self) -> FrameInput:
        frame = FrameInput(
            pointer=self._pointer,
            pressed=self._pressed,
            press_origin=self._press_origin,
            scroll_delta_y=self._scroll_delta_y,
        )
        self._scroll_delta_y = 0.0
        return frame

    def _update_pointer(self, payload: Mapping[str, object]) -> None:
        if "x" not in payload or "y" not in payload:
            return
        try:
            self._pointer = ScreenPoint(float(payload["x"]), float(payload["y"]))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            LOGGER.debug("ignoring pointer payload with non-numeric coordinates: %r", payload)
