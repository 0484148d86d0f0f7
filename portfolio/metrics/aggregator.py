"""
Metrics aggregator — portfolio KPIs and sector distribution from a snapshot.

Everything here is a pure function of its inputs. Results are recomputed in
full on every call, never patched incrementally. Empty snapshots degrade to
zeros, and every division short-circuits on a zero denominator so no output is
ever NaN or Infinity.
"""
import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional, Sequence

from portfolio.holdings.schema import Holding

logger = logging.getLogger(__name__)

SectorDistribution = Dict[str, float]


@dataclass(frozen=True)
class ReturnBaseline:
    """Historical cost basis supplied by the caller (not derived here)."""
    invested: float = 0.0


@dataclass(frozen=True)
class PortfolioSummary:
    """Dashboard KPI cards."""
    total_value: float = 0.0
    day_change: float = 0.0
    day_change_percent: float = 0.0
    total_return: float = 0.0
    total_return_percent: float = 0.0
    active_holdings: int = 0
    average_value: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def _safe_div(numerator: float, denominator: float) -> float:
    if denominator == 0 or not math.isfinite(denominator):
        return 0.0
    return numerator / denominator


def summarize(
    snapshot: Sequence[Holding], baseline: Optional[ReturnBaseline] = None
) -> PortfolioSummary:
    """
    Compute the portfolio summary.

    day_change_percent is the arithmetic mean of each holding's
    change_percent, not a value-weighted figure.
    average_value is total value per holding.

    Args:
        snapshot: Holdings from HoldingsStore.list()
        baseline: Cost basis for total return. Without one (or with
            invested <= 0) total return figures are 0.
    """
    count = len(snapshot)
    total_value = math.fsum(h.market_value for h in snapshot)
    day_change = math.fsum(h.day_change for h in snapshot)
    day_change_percent = _safe_div(math.fsum(h.change_percent for h in snapshot), count)

    total_return = 0.0
    total_return_percent = 0.0
    if baseline is not None and baseline.invested > 0:
        total_return = total_value - baseline.invested
        total_return_percent = _safe_div(total_return, baseline.invested) * 100

    summary = PortfolioSummary(
        total_value=total_value,
        day_change=day_change,
        day_change_percent=day_change_percent,
        total_return=total_return,
        total_return_percent=total_return_percent,
        active_holdings=count,
        average_value=_safe_div(total_value, count),
    )
    logger.debug(f"Summary recomputed for {count} holdings: value={total_value:.2f}")
    return summary


def distribute_by_sector(
    snapshot: Sequence[Holding],
    canonical_order: Optional[Iterable[str]] = None,
    other_label: Optional[str] = None,
) -> SectorDistribution:
    """
    Aggregate market value by sector.

    Without canonical_order, sectors appear in order of first appearance.
    With it, listed sectors follow that order and sectors with no holdings
    are omitted (no zero-width chart segments). Unlisted sectors are kept as
    their own groups after the listed ones, or merged into a single
    other_label group when the caller asks for it.

    Returns:
        {sector: value}, values summing to the snapshot's total value
    """
    return group_by_sector(
        snapshot,
        lambda holdings: math.fsum(h.market_value for h in holdings),
        canonical_order,
        other_label,
    )


def sector_weights(distribution: SectorDistribution) -> Dict[str, float]:
    """Each sector's share of the total, in percent. All zeros on a zero total."""
    total = math.fsum(distribution.values())
    return {sector: _safe_div(value, total) * 100 for sector, value in distribution.items()}


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def group_by_sector(snapshot, reduce, canonical_order=None, other_label=None) -> Dict[str, float]:
    """Group holdings by sector and reduce each group to one number."""
    groups: Dict[str, List[Holding]] = {}
    for h in snapshot:
        groups.setdefault(h.sector, []).append(h)

    if canonical_order is None:
        return {sector: reduce(members) for sector, members in groups.items()}

    order = list(dict.fromkeys(canonical_order))
    listed = set(order)
    result = {sector: reduce(groups[sector]) for sector in order if sector in groups}

    unlisted = [sector for sector in groups if sector not in listed]
    if other_label is not None and unlisted:
        merged = list(groups[other_label]) if other_label in listed and other_label in groups else []
        merged.extend(h for sector in unlisted for h in groups[sector])
        result[other_label] = reduce(merged)
    else:
        for sector in unlisted:
            result[sector] = reduce(groups[sector])
    return result
