from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
import math
from pathlib import Path

import numpy as np

from zoomplot import (
    HDIEvent,
    PlotConfig,
    PlotContext,
    PlotFrame,
    PointerTracker,
    ScreenPoint,
    Size,
    format_tick_label,
    load_plot_config,
    tick_values,
)
from zoomplot.raster import RasterHost

LOGGER = logging.getLogger("zoomplot.cli")
PLOT_LABEL = "cli-plot"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="zoomplot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a sine series, replay scripted pan/zoom input, write a PNG.")
    render.add_argument("output", type=Path)
    render.add_argument("--samples", type=int, default=200)
    render.add_argument("--width", type=int, default=480)
    render.add_argument("--height", type=int, default=240)
    render.add_argument("--no-yticks", action="store_true", help="Hide the Y tick labels and their margin.")
    render.add_argument("--drag", type=float, default=0.0, help="Vertical drag distance in pixels over the plot centre.")
    render.add_argument("--scroll", type=float, default=0.0, help="Vertical scroll delta over the plot centre.")
    render.add_argument("--config", type=Path, default=None, help="TOML file with [style]/[interaction] tables.")

    ticks = sub.add_parser("ticks", help="Print the tick values for a vertical range.")
    ticks.add_argument("start", type=float)
    ticks.add_argument("end", type=float)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        if args.samples < 0:
            raise ValueError("samples must be >= 0")
        config = load_plot_config(args.config) if args.config is not None else PlotConfig()
        frame = render_session(
            args.output,
            config=config,
            size=Size(float(args.width), float(args.height)),
            sample_count=args.samples,
            show_yticks=not args.no_yticks,
            drag_dy=args.drag,
            scroll=args.scroll,
        )
        y0, y1 = frame.y_range
        print(f"wrote {args.output} y_range=({y0:.3f}, {y1:.3f}) ticks={[format_tick_label(t) for t in frame.ticks]}")
        return 0

    if args.command == "ticks":
        print(" ".join(format_tick_label(v) for v in tick_values(args.start, args.end)))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def sine_samples(sample_count: int, amplitude: float = 80.0, periods: float = 3.0) -> np.ndarray:
    if sample_count == 0:
        return np.empty((0, 2), dtype=np.float64)
    xs = np.arange(sample_count, dtype=np.float64)
    ys = amplitude * np.sin(2.0 * math.pi * periods * xs / float(sample_count))
    return np.column_stack([xs, ys])


def scripted_events(center: ScreenPoint, drag_dy: float, scroll: float) -> list[list[HDIEvent]]:
    batches: list[list[HDIEvent]] = []
    ts = 0
    event_id = 0

    def event(event_type: str, payload: dict[str, object]) -> HDIEvent:
        nonlocal ts, event_id
        ts += 16_000_000
        event_id += 1
        device = "trackpad" if event_type == "scroll" else "mouse"
        return HDIEvent(event_id=event_id, ts_ns=ts, device=device, event_type=event_type, status="OK", payload=payload)

    if drag_dy:
        at = {"x": center.x, "y": center.y}
        batches.append([event("pointer_move", at), event("click", {**at, "button": 0, "phase": "down"})])
        moved = {"x": center.x, "y": center.y + drag_dy}
        batches.append([event("pointer_move", moved)])
        batches.append([event("click", {**moved, "button": 0, "phase": "up"})])
    if scroll:
        batches.append([event("scroll", {"x": center.x, "y": center.y, "delta_x": 0.0, "delta_y": scroll})])
    return batches


def render_session(
    output: Path,
    *,
    config: PlotConfig,
    size: Size,
    sample_count: int,
    show_yticks: bool,
    drag_dy: float = 0.0,
    scroll: float = 0.0,
) -> PlotFrame:
    ctx = PlotContext(config=config)
    host = RasterHost(int(math.ceil(size.width)), int(math.ceil(size.height)), background=config.style.background)
    tracker = PointerTracker()
    samples = sine_samples(sample_count)

    def run_frame() -> PlotFrame:
        host.begin_frame(tracker.take_frame())
        frame = ctx.plot(PLOT_LABEL, size, sample_count, show_yticks).show(host, samples)
        host.end_frame()
        return frame

    frame = run_frame()
    for batch in scripted_events(frame.plot_rect.center, drag_dy, scroll):
        tracker.feed(batch)
        frame = run_frame()
        LOGGER.info("frame y_range=%s", frame.y_range)
    host.save_png(output)
    return frame


if __name__ == "__main__":
    raise SystemExit(main())
