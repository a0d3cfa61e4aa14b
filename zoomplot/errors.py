from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when sample input cannot be interpreted as (x, y) pairs."""


class PlotConfigError(ValueError):
    """Raised when a plot configuration file is malformed."""
