"""
Holdings store — the single owner of the live holdings set.

Replaces module-level sample data with an explicit instance constructed from
an initial snapshot. All mutations and snapshot reads are serialized by one
lock, so list() always returns some committed state.
"""
import logging
import threading
import uuid
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from portfolio.holdings.errors import NotFoundError, ValidationError
from portfolio.holdings.history import ChangeHistory
from portfolio.holdings.schema import Holding, check_patch, validate_holding

logger = logging.getLogger(__name__)

Snapshot = Tuple[Holding, ...]
Listener = Callable[[Snapshot], None]


class HoldingsStore:
    """Canonical, mutable set of holdings in insertion order."""

    def __init__(
        self,
        initial: Optional[Iterable[Holding]] = None,
        history: Optional[ChangeHistory] = None,
    ):
        self._lock = threading.RLock()
        self._holdings: Dict[str, Holding] = {}
        self._issued_ids: Set[str] = set()
        self._listeners: List[Listener] = []
        self.history = history if history is not None else ChangeHistory()

        for h in initial or ():
            self.add(h)

    def __len__(self) -> int:
        with self._lock:
            return len(self._holdings)

    def __contains__(self, holding_id: str) -> bool:
        with self._lock:
            return holding_id in self._holdings

    @property
    def lock(self) -> threading.RLock:
        """The store lock. Hold it to make a read and a dependent update atomic."""
        return self._lock

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    def list(self) -> Snapshot:
        """Immutable snapshot of all holdings."""
        with self._lock:
            return tuple(self._holdings.values())

    def get(self, holding_id: str) -> Holding:
        """Look up a single holding by id. Raises NotFoundError."""
        with self._lock:
            holding = self._holdings.get(holding_id)
        if holding is None:
            raise NotFoundError(holding_id)
        return holding

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------

    def add(self, holding: Holding) -> Holding:
        """
        Add a new holding and return it with its assigned id.

        Raises ValidationError on invalid fields or a supplied id that is
        live or was used before.
        """
        try:
            holding = validate_holding(holding)
        except ValidationError as e:
            logger.warning(f"Rejected add of {holding.symbol!r}: {e.message}")
            raise

        with self._lock:
            if holding.id:
                if holding.id in self._issued_ids:
                    logger.warning(f"Rejected add of {holding.symbol}: id {holding.id} already used")
                    raise ValidationError(f"id {holding.id} is already in use", field="id")
            else:
                holding = holding.with_changes(id=self._new_id())

            self._issued_ids.add(holding.id)
            self._holdings[holding.id] = holding
            self.history.record(holding.id, holding.symbol, "ADD", holding.to_dict())
            snapshot = tuple(self._holdings.values())
            logger.info(f"Added {holding.symbol} ({holding.id}): {holding.shares} @ {holding.price}")
            self._notify(snapshot)
        return holding

    def edit(self, holding_id: str, **patch) -> Holding:
        """
        Replace fields on an existing holding, preserving its id and position.

        Raises NotFoundError for an unknown id, ValidationError for invalid
        or unknown fields.
        """
        with self._lock:
            current = self._holdings.get(holding_id)
            if current is None:
                logger.warning(f"Holding {holding_id} not found for edit")
                raise NotFoundError(holding_id)

            try:
                check_patch(patch)
                updated = validate_holding(current.with_changes(**patch))
            except ValidationError as e:
                logger.warning(f"Rejected edit of {current.symbol} ({holding_id}): {e.message}")
                raise

            old_values = {k: getattr(current, k) for k in patch}
            self._holdings[holding_id] = updated
            self.history.record(holding_id, updated.symbol, "EDIT", {
                "old": old_values,
                "new": dict(patch),
            })
            snapshot = tuple(self._holdings.values())
            logger.info(f"Edited {updated.symbol} ({holding_id}): {sorted(patch)}")
            self._notify(snapshot)
        return updated

    def remove(self, holding_id: str) -> Holding:
        """Remove a holding permanently. Returns the removed Holding."""
        with self._lock:
            removed = self._holdings.pop(holding_id, None)
            if removed is None:
                logger.warning(f"Holding {holding_id} not found for removal")
                raise NotFoundError(holding_id)

            self.history.record(holding_id, removed.symbol, "REMOVE", removed.to_dict())
            snapshot = tuple(self._holdings.values())
            logger.info(f"Removed {removed.symbol} ({holding_id})")
            self._notify(snapshot)
        return removed

    # -----------------------------------------------------------------------
    # Change notification
    # -----------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        """Call listener(snapshot) after every committed mutation."""
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _new_id(self) -> str:
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in self._issued_ids:
                return candidate

    def _notify(self, snapshot: Snapshot) -> None:
        # Runs under the lock: no other mutation can interleave before
        # listeners have seen this commit. A failing listener is logged
        # and skipped; the commit stands and later listeners still run.
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Listener {listener!r} failed after commit")
