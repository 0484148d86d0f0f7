"""
Selection coordinator — which single holding (if any) the chart is showing.

Two states: NoSelection and Selected(id). The coordinator subscribes to the
store and drops back to NoSelection as soon as a committed change leaves the
selected id absent. It never picks another holding on its own.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from portfolio.holdings.errors import NotFoundError
from portfolio.holdings.schema import Holding
from portfolio.holdings.store import HoldingsStore, Snapshot
from portfolio.series.generator import RandomSource, Series, generate_for, parse_window

logger = logging.getLogger(__name__)


class SelectionState(str, Enum):
    NO_SELECTION = "NoSelection"
    SELECTED = "Selected"


class SelectionCoordinator:
    """Tracks the selected holding and keeps it consistent with the store."""

    def __init__(self, store: HoldingsStore):
        self._store = store
        self._selected_id: Optional[str] = None
        store.subscribe(self._on_change)

    @property
    def state(self) -> SelectionState:
        if self._selected_id is None:
            return SelectionState.NO_SELECTION
        return SelectionState.SELECTED

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def select(self, holding_id: str) -> Holding:
        """Move to Selected(holding_id). Raises NotFoundError if not live."""
        # Hold the store lock so a concurrent remove cannot land between
        # the lookup and the state change.
        with self._store.lock:
            holding = self._store.get(holding_id)
            self._selected_id = holding.id
        logger.debug(f"Selected {holding.symbol} ({holding.id})")
        return holding

    def clear(self) -> None:
        """Move to NoSelection unconditionally."""
        self._selected_id = None

    def selected_holding(self) -> Optional[Holding]:
        """Current selected holding, or None under NoSelection."""
        if self._selected_id is None:
            return None
        try:
            return self._store.get(self._selected_id)
        except NotFoundError:
            # Removed while this coordinator was unsubscribed
            self._selected_id = None
            return None

    def series(
        self,
        window,
        rng: RandomSource = None,
        now: Optional[datetime] = None,
    ) -> Series:
        """Series for the selected holding; empty under NoSelection."""
        window = parse_window(window)
        holding = self.selected_holding()
        if holding is None:
            return Series(window=window)
        return generate_for(holding, window, rng=rng, now=now)

    def close(self) -> None:
        """Stop following the store."""
        self._store.unsubscribe(self._on_change)

    def _on_change(self, snapshot: Snapshot) -> None:
        if self._selected_id is None:
            return
        if not any(h.id == self._selected_id for h in snapshot):
            logger.info(f"Selected holding {self._selected_id} no longer exists, clearing selection")
            self._selected_id = None
