"""
Series generator — synthetic price history for a holding over a time window.

Each window has a fixed point count, label cadence, and volatility:

    1D  → 24 hourly points          vol 0.5%
    1W  →  7 daily points           vol 1%
    1M  → 30 daily points           vol 2%
    3M  → 30 points, 3-day stride   vol 3%
    1Y  → 12 monthly points         vol 5%

Point i of n:
    price_i = anchor * (1 + trend% * i/(n-1) + (u_i - 0.5) * vol%)

so the series drifts toward the holding's stated change and ends near
anchor * (1 + trend%). The random source is injectable: pass a seeded
numpy Generator (or an int seed) and the output is exactly reproducible.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

import numpy as np
import pandas as pd

from config.settings import SERIES_SEED
from portfolio.holdings.errors import ValidationError
from portfolio.holdings.schema import Holding

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]

# English names, independent of the process locale
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class Window(str, Enum):
    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"


@dataclass(frozen=True)
class WindowSpec:
    points: int
    step: object            # pandas Timedelta or DateOffset between points
    volatility_pct: float


WINDOW_SPECS = {
    Window.ONE_DAY: WindowSpec(24, pd.Timedelta(hours=1), 0.5),
    Window.ONE_WEEK: WindowSpec(7, pd.Timedelta(days=1), 1.0),
    Window.ONE_MONTH: WindowSpec(30, pd.Timedelta(days=1), 2.0),
    Window.THREE_MONTHS: WindowSpec(30, pd.Timedelta(days=3), 3.0),
    Window.ONE_YEAR: WindowSpec(12, pd.offsets.MonthBegin(1), 5.0),
}


class SeriesPoint(NamedTuple):
    label: str
    price: float


@dataclass(frozen=True)
class Series:
    """Chart-ready ordered points for one window."""
    window: Window
    points: Tuple[SeriesPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[SeriesPoint]:
        return iter(self.points)

    @property
    def labels(self) -> List[str]:
        return [p.label for p in self.points]

    @property
    def prices(self) -> List[float]:
        return [p.price for p in self.points]

    def to_dict(self) -> dict:
        return {"window": self.window.value, "labels": self.labels, "prices": self.prices}

    def to_frame(self) -> pd.DataFrame:
        """Two-column DataFrame (label, price) for chart wiring."""
        return pd.DataFrame({"label": self.labels, "price": self.prices})


def parse_window(window: Union[Window, str]) -> Window:
    """Accept a Window or its string value ("1D", "1W", ...)."""
    try:
        return Window(window)
    except ValueError:
        valid = ", ".join(w.value for w in Window)
        raise ValidationError(f"Unknown window {window!r}, expected one of: {valid}", field="window")


def resolve_rng(rng: RandomSource = None) -> np.random.Generator:
    """Generator as-is, int as a seed, None as the configured default seed."""
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        return np.random.default_rng(SERIES_SEED)
    return np.random.default_rng(rng)


def timestamps(window: Union[Window, str], now: Optional[datetime] = None) -> pd.DatetimeIndex:
    """Chronological point timestamps for a window. Every window, 3M included, ends at now."""
    window = parse_window(window)
    spec = WINDOW_SPECS[window]
    end = pd.Timestamp(now if now is not None else datetime.now())
    if window is Window.ONE_YEAR:
        end = end.normalize()
    return pd.date_range(end=end, periods=spec.points, freq=spec.step)


def format_label(window: Window, ts: pd.Timestamp) -> str:
    """Per-window label: hour:minute, weekday, day, month+day, month."""
    if window is Window.ONE_DAY:
        return f"{ts.hour:02d}:{ts.minute:02d}"
    if window is Window.ONE_WEEK:
        return WEEKDAYS[ts.dayofweek]
    if window is Window.ONE_MONTH:
        return str(ts.day)
    if window is Window.THREE_MONTHS:
        return f"{MONTHS[ts.month - 1]} {ts.day}"
    return MONTHS[ts.month - 1]


def generate(
    anchor_price: float,
    trend_percent: float,
    window: Union[Window, str],
    rng: RandomSource = None,
    now: Optional[datetime] = None,
) -> Series:
    """
    Generate a synthetic price series around anchor_price.

    Args:
        anchor_price: Current price the series is built around (>= 0)
        trend_percent: Signed % drift reached by the last point
        window: "1D", "1W", "1M", "3M" or "1Y"
        rng: numpy Generator, int seed, or None for the configured default
        now: Timestamp of the last point (default: current time)

    Returns:
        Series with the window's fixed number of points, prices >= 0
    """
    window = parse_window(window)
    if not _finite(anchor_price) or anchor_price < 0:
        raise ValidationError(f"anchor_price must be a finite number >= 0, got {anchor_price!r}", field="anchor_price")
    if not _finite(trend_percent):
        raise ValidationError(f"trend_percent must be a finite number, got {trend_percent!r}", field="trend_percent")

    spec = WINDOW_SPECS[window]
    n = spec.points
    noise = resolve_rng(rng).random(n) - 0.5
    progress = np.linspace(0.0, 1.0, n) if n > 1 else np.ones(n)

    factors = 1.0 + (trend_percent / 100.0) * progress + noise * (spec.volatility_pct / 100.0)
    prices = np.round(np.clip(anchor_price * factors, 0.0, None), 2)

    labels = [format_label(window, ts) for ts in timestamps(window, now)]
    points = tuple(SeriesPoint(label, float(price)) for label, price in zip(labels, prices))
    logger.debug(f"Generated {window.value} series: {n} points around {anchor_price}")
    return Series(window=window, points=points)


def generate_for(
    holding: Holding,
    window: Union[Window, str],
    rng: RandomSource = None,
    now: Optional[datetime] = None,
) -> Series:
    """Series anchored on a holding's price and trending with its change."""
    return generate(holding.price, holding.change_percent, window, rng=rng, now=now)


def _finite(value) -> bool:
    try:
        return math.isfinite(value) and not isinstance(value, bool)
    except TypeError:
        return False
