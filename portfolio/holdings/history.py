"""
Holding history — audit trail for all committed store mutations.

Every add/edit/remove is recorded with timestamp, action type, and details.
Kept in memory alongside the store and bounded: once full, the oldest
records are dropped first. Persistence is the caller's concern.
"""
import logging
from collections import deque
from dataclasses import dataclass, field, asdict
from datetime import datetime, timedelta
from typing import Deque, List, Optional

from config.settings import HISTORY_MAXLEN

logger = logging.getLogger(__name__)


# Action types
ACTIONS = ("ADD", "EDIT", "REMOVE")


@dataclass(frozen=True)
class ChangeRecord:
    """One committed mutation."""
    timestamp: str
    holding_id: str
    symbol: str
    action: str
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


class ChangeHistory:
    """Append-only log of holding changes, capped at maxlen records."""

    def __init__(self, maxlen: Optional[int] = HISTORY_MAXLEN):
        self._records: Deque[ChangeRecord] = deque(maxlen=maxlen)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def maxlen(self) -> Optional[int]:
        return self._records.maxlen

    def clear(self) -> None:
        """Drop all records."""
        self._records.clear()
        logger.debug("History cleared")

    def record(self, holding_id: str, symbol: str, action: str, details: dict) -> ChangeRecord:
        """
        Append a change to the log.

        Args:
            holding_id: Id of the affected holding
            symbol: Ticker at the time of the change
            action: One of ADD, EDIT, REMOVE
            details: Dict with action-specific details
        """
        if action not in ACTIONS:
            logger.warning(f"Unknown action '{action}' for {symbol}, logging anyway")

        entry = ChangeRecord(
            timestamp=datetime.now().isoformat(),
            holding_id=holding_id,
            symbol=symbol.upper(),
            action=action,
            details=details,
        )
        self._records.append(entry)
        logger.debug(f"History: {symbol} {action}")
        return entry

    def entries(self, holding_id: Optional[str] = None, symbol: Optional[str] = None) -> List[ChangeRecord]:
        """
        Get history entries, optionally filtered by holding id or symbol.
        """
        result = list(self._records)
        if holding_id:
            result = [r for r in result if r.holding_id == holding_id]
        if symbol:
            symbol = symbol.upper()
            result = [r for r in result if r.symbol == symbol]
        return result

    def recent(self, days: int = 30) -> List[ChangeRecord]:
        """Get history entries from the last N days."""
        cutoff = datetime.now() - timedelta(days=days)
        result = []
        for r in self._records:
            try:
                if datetime.fromisoformat(r.timestamp) >= cutoff:
                    result.append(r)
            except ValueError:
                continue
        return result
