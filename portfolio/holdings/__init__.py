"""
Holdings — canonical holdings set

Core types: Holding, Sector, HoldingType
Store: add/edit/remove/list holdings under a single lock
History: audit trail for all committed changes
"""
from portfolio.holdings.errors import PortfolioError, ValidationError, NotFoundError
from portfolio.holdings.schema import Holding, Sector, HoldingType, validate_holding
from portfolio.holdings.history import ChangeHistory, ChangeRecord
from portfolio.holdings.store import HoldingsStore, Snapshot

__all__ = [
    "PortfolioError",
    "ValidationError",
    "NotFoundError",
    "Holding",
    "Sector",
    "HoldingType",
    "validate_holding",
    "ChangeHistory",
    "ChangeRecord",
    "HoldingsStore",
    "Snapshot",
]
