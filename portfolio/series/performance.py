"""
Portfolio performance series — value and returns over a window.

Sums each holding's generated price series times its shares. Returns are
measured against the caller's cost basis when one is supplied, otherwise
against the first point of the window.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from portfolio.holdings.schema import Holding
from portfolio.metrics.aggregator import ReturnBaseline
from portfolio.series.generator import (
    RandomSource,
    Window,
    format_label,
    generate_for,
    parse_window,
    resolve_rng,
    timestamps,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerformanceSeries:
    window: Window
    labels: List[str]
    values: List[float]
    returns: List[float]

    def __len__(self) -> int:
        return len(self.labels)

    def to_dict(self) -> dict:
        return {
            "window": self.window.value,
            "labels": self.labels,
            "values": self.values,
            "returns": self.returns,
        }

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"label": self.labels, "value": self.values, "return": self.returns})


def holding_values(
    snapshot: Sequence[Holding],
    window: Union[Window, str],
    rng: RandomSource = None,
    now: Optional[datetime] = None,
) -> pd.DataFrame:
    """
    Per-holding market value at each point, one column per holding.

    Columns are keyed "<position>:<id or symbol>" so holdings that share a
    symbol, or carry no id yet, each keep their own column.

    A single random source is drawn from in snapshot order, so a seeded
    call is reproducible for the same snapshot.
    """
    window = parse_window(window)
    generator = resolve_rng(rng)
    index = [format_label(window, ts) for ts in timestamps(window, now)]

    columns = {}
    for i, h in enumerate(snapshot):
        series = generate_for(h, window, rng=generator, now=now)
        columns[f"{i}:{h.id or h.symbol}"] = np.asarray(series.prices) * h.shares
    if not columns:
        return pd.DataFrame(index=pd.Index(index, name="label"))
    return pd.DataFrame(columns, index=pd.Index(index, name="label"))


def performance_series(
    snapshot: Sequence[Holding],
    window: Union[Window, str],
    baseline: Optional[ReturnBaseline] = None,
    rng: RandomSource = None,
    now: Optional[datetime] = None,
) -> PerformanceSeries:
    """
    Portfolio value and returns for each point of the window.

    Empty snapshots yield a zero-valued series of the window's length.
    """
    window = parse_window(window)
    frame = holding_values(snapshot, window, rng=rng, now=now)

    if frame.columns.empty:
        values = pd.Series(0.0, index=frame.index)
    else:
        values = frame.sum(axis=1)

    if baseline is not None and baseline.invested > 0:
        reference = baseline.invested
    else:
        reference = float(values.iloc[0]) if len(values) else 0.0
    returns = values - reference

    logger.debug(f"Performance series {window.value}: {len(snapshot)} holdings, {len(values)} points")
    return PerformanceSeries(
        window=window,
        labels=list(frame.index),
        values=[round(float(v), 2) for v in values],
        returns=[round(float(r), 2) for r in returns],
    )
