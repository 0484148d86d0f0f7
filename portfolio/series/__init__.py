"""
Series — chart-ready price history

- generator: per-holding synthetic series for 1D/1W/1M/3M/1Y windows
- performance: portfolio value/returns series built from holding series
"""
from portfolio.series.generator import (
    Window,
    WindowSpec,
    WINDOW_SPECS,
    SeriesPoint,
    Series,
    generate,
    generate_for,
    parse_window,
)
from portfolio.series.performance import PerformanceSeries, performance_series

__all__ = [
    "Window",
    "WindowSpec",
    "WINDOW_SPECS",
    "SeriesPoint",
    "Series",
    "generate",
    "generate_for",
    "parse_window",
    "PerformanceSeries",
    "performance_series",
]
