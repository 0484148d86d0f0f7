"""
Metrics — derived views recomputed from a holdings snapshot.

- summarize: KPI cards (value, day change, total return, count)
- distribute_by_sector / sector_weights: sector distribution chart
- top_movers / sector_performance: movers and sector trend panels
"""
from portfolio.metrics.aggregator import (
    PortfolioSummary,
    ReturnBaseline,
    SectorDistribution,
    summarize,
    distribute_by_sector,
    sector_weights,
)
from portfolio.metrics.movers import top_movers, sector_performance

__all__ = [
    "PortfolioSummary",
    "ReturnBaseline",
    "SectorDistribution",
    "summarize",
    "distribute_by_sector",
    "sector_weights",
    "top_movers",
    "sector_performance",
]
