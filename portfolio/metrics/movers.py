"""
Market views — top movers and per-sector average change.

Backs the dashboard's "Top Movers" and "Market Trends" panels.
"""
import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence

from portfolio.holdings.errors import ValidationError
from portfolio.holdings.schema import Holding
from portfolio.metrics.aggregator import group_by_sector

logger = logging.getLogger(__name__)

DIRECTIONS = ("both", "gainers", "losers")


def top_movers(snapshot: Sequence[Holding], n: int = 3, direction: str = "both") -> List[Holding]:
    """
    Holdings with the largest period change.

    Args:
        n: Maximum number of holdings returned
        direction: "both" ranks by absolute change, "gainers" keeps only
            positive changes (largest first), "losers" only negative ones
            (most negative first)

    Ties keep insertion order.
    """
    if direction not in DIRECTIONS:
        raise ValidationError(f"direction must be one of {DIRECTIONS}, got {direction!r}", field="direction")
    if n <= 0:
        return []

    if direction == "gainers":
        candidates = [h for h in snapshot if h.change_percent > 0]
        ranked = sorted(candidates, key=lambda h: -h.change_percent)
    elif direction == "losers":
        candidates = [h for h in snapshot if h.change_percent < 0]
        ranked = sorted(candidates, key=lambda h: h.change_percent)
    else:
        ranked = sorted(snapshot, key=lambda h: -abs(h.change_percent))
    logger.debug(f"Top movers ({direction}): {len(ranked)} candidates, returning {min(n, len(ranked))}")
    return ranked[:n]


def sector_performance(
    snapshot: Sequence[Holding],
    canonical_order: Optional[Iterable[str]] = None,
    other_label: Optional[str] = None,
) -> Dict[str, float]:
    """
    Unweighted mean change_percent per sector.

    Ordering follows distribute_by_sector(): canonical order when given,
    absent sectors omitted, otherwise first appearance.
    """
    return group_by_sector(
        snapshot,
        lambda holdings: math.fsum(h.change_percent for h in holdings) / len(holdings),
        canonical_order,
        other_label,
    )
