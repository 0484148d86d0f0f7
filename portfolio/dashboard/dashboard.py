"""
Portfolio dashboard — one object wiring store, selection and derived views.

The presentation layer calls these methods directly instead of passing
onAdd/onEdit/onDelete/onSelect callbacks around. Mutations raise
ValidationError / NotFoundError; views never raise on a valid snapshot.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Optional

from config.settings import SECTORS, TOP_MOVERS_N
from portfolio.holdings.errors import NotFoundError
from portfolio.holdings.schema import Holding
from portfolio.holdings.store import HoldingsStore, Snapshot
from portfolio.metrics.aggregator import (
    PortfolioSummary,
    ReturnBaseline,
    SectorDistribution,
    distribute_by_sector,
    sector_weights,
    summarize,
)
from portfolio.metrics.movers import sector_performance, top_movers
from portfolio.selection.coordinator import SelectionCoordinator
from portfolio.series.generator import RandomSource, Series, generate_for, parse_window
from portfolio.series.performance import PerformanceSeries, performance_series

logger = logging.getLogger(__name__)


class PortfolioDashboard:
    """Facade over the holdings store and the derived-metrics engine."""

    def __init__(
        self,
        initial: Optional[Iterable[Holding]] = None,
        baseline: Optional[ReturnBaseline] = None,
        sector_order: Optional[List[str]] = None,
    ):
        self.store = HoldingsStore(initial)
        self.selection = SelectionCoordinator(self.store)
        self.baseline = baseline
        self.sector_order = list(SECTORS) if sector_order is None else sector_order

    # -----------------------------------------------------------------------
    # Commands
    # -----------------------------------------------------------------------

    def add(self, holding: Holding) -> Holding:
        return self.store.add(holding)

    def edit(self, holding_id: str, **patch) -> Holding:
        return self.store.edit(holding_id, **patch)

    def remove(self, holding_id: str) -> Holding:
        return self.store.remove(holding_id)

    def select(self, holding_id: str) -> Holding:
        return self.selection.select(holding_id)

    def select_symbol(self, symbol: str) -> Holding:
        """Select the first live holding with this ticker (case-insensitive)."""
        symbol = symbol.upper()
        for h in self.store.list():
            if h.symbol.upper() == symbol:
                return self.selection.select(h.id)
        raise NotFoundError(symbol)

    def clear_selection(self) -> None:
        self.selection.clear()

    # -----------------------------------------------------------------------
    # Views
    # -----------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return self.store.list()

    def summary(self) -> PortfolioSummary:
        return summarize(self.store.list(), self.baseline)

    def distribution(self) -> SectorDistribution:
        return distribute_by_sector(self.store.list(), self.sector_order)

    def weights(self) -> dict:
        return sector_weights(self.distribution())

    def movers(self, n: int = TOP_MOVERS_N, direction: str = "both") -> List[Holding]:
        return top_movers(self.store.list(), n=n, direction=direction)

    def trends(self) -> dict:
        return sector_performance(self.store.list(), self.sector_order)

    def chart(self, window, rng: RandomSource = None, now: Optional[datetime] = None) -> Series:
        return self.selection.series(window, rng=rng, now=now)

    def performance(self, window, rng: RandomSource = None, now: Optional[datetime] = None) -> PerformanceSeries:
        return performance_series(self.store.list(), window, baseline=self.baseline, rng=rng, now=now)

    def views(self, window, rng: RandomSource = None, now: Optional[datetime] = None) -> dict:
        """
        Every panel's data from one snapshot.

        Reading the snapshot once keeps all panels consistent with the same
        committed state.
        """
        snapshot = self.store.list()
        logger.debug(f"Building dashboard views for {len(snapshot)} holdings")
        distribution = distribute_by_sector(snapshot, self.sector_order)
        selected = self.selection.selected_holding()
        if selected is None:
            chart = Series(window=parse_window(window))
        else:
            chart = generate_for(selected, window, rng=rng, now=now)
        return {
            "summary": summarize(snapshot, self.baseline).to_dict(),
            "distribution": distribution,
            "weights": sector_weights(distribution),
            "trends": sector_performance(snapshot, self.sector_order),
            "movers": [h.to_dict() for h in top_movers(snapshot, n=TOP_MOVERS_N)],
            "selected": selected.to_dict() if selected else None,
            "chart": chart.to_dict(),
            "holdings": [h.to_dict() for h in snapshot],
        }
