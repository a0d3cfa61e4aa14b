from zoomplot.config import InteractionConfig, PlotConfig, PlotStyle, load_plot_config
from zoomplot.errors import PlotConfigError, PlotDataError
from zoomplot.geometry import Rect, ScreenPoint, Size
from zoomplot.input import FrameInput, HDIEvent, PointerTracker
from zoomplot.plot import PlotContext, PlotFrame, PlotHandle
from zoomplot.scales import format_tick_label, remap, tick_values
from zoomplot.view_state import ViewState, ViewStateRegistry

__all__ = [
    "FrameInput",
    "HDIEvent",
    "InteractionConfig",
    "PlotConfig",
    "PlotConfigError",
    "PlotContext",
    "PlotDataError",
    "PlotFrame",
    "PlotHandle",
    "PlotStyle",
    "PointerTracker",
    "Rect",
    "ScreenPoint",
    "Size",
    "ViewState",
    "ViewStateRegistry",
    "format_tick_label",
    "load_plot_config",
    "remap",
    "tick_values",
]
