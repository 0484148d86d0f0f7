"""
Holdings data models — Holding, Sector, HoldingType

Uses dataclasses for zero-dependency type safety.
Holdings are frozen: an edit produces a replacement with the same id, so a
snapshot handed out by the store can never be mutated from outside.
"""
import math
import numbers
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict

from portfolio.holdings.errors import ValidationError


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

class Sector(str, Enum):
    """Closed set of sectors offered by the edit form."""
    TECHNOLOGY = "Technology"
    FINANCE = "Finance"
    HEALTHCARE = "Healthcare"
    ENERGY = "Energy"
    CONSUMER_GOODS = "Consumer Goods"
    INDUSTRIAL = "Industrial"
    MATERIALS = "Materials"
    REAL_ESTATE = "Real Estate"
    TELECOMMUNICATIONS = "Telecommunications"
    UTILITIES = "Utilities"


class HoldingType(str, Enum):
    """Asset class. Carried through, never aggregated."""
    COMMON_STOCK = "Common Stock"
    PREFERRED_STOCK = "Preferred Stock"
    ETF = "ETF"
    MUTUAL_FUND = "Mutual Fund"


# ---------------------------------------------------------------------------
# Holding
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Holding:
    """A single portfolio position."""

    symbol: str
    name: str = ""
    price: float = 0.0             # current unit price
    change_percent: float = 0.0    # signed % change over the reporting period
    shares: int = 1
    sector: str = Sector.TECHNOLOGY.value
    type: str = HoldingType.COMMON_STOCK.value
    id: str = ""                   # assigned by the store on add

    @property
    def market_value(self) -> float:
        """Current market value of the position."""
        return self.price * self.shares

    @property
    def day_change(self) -> float:
        """Monetary contribution of this holding's period change."""
        return self.market_value * self.change_percent / 100

    def with_changes(self, **changes) -> "Holding":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize to JSON-friendly dict."""
        return {
            "id": self.id,
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "change_percent": self.change_percent,
            "shares": self.shares,
            "sector": self.sector,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Holding":
        """Deserialize from dict. Accepts the dashboard's camelCase keys too."""
        change = data.get("change_percent", data.get("changePercent", data.get("change", 0.0)))
        return cls(
            id=str(data.get("id", "") or ""),
            symbol=data.get("symbol", ""),
            name=data.get("name", ""),
            price=data.get("price", 0.0),
            change_percent=change,
            shares=data.get("shares", 1),
            sector=data.get("sector", Sector.TECHNOLOGY.value),
            type=data.get("type", HoldingType.COMMON_STOCK.value),
        )


HOLDING_FIELDS = tuple(f.name for f in fields(Holding))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_holding(holding: Holding) -> Holding:
    """
    Check field constraints and normalize numeric types.

    Raises ValidationError if shares is not a positive integer, price is
    negative, or any numeric field is not a finite number.
    Returns the holding with price/change_percent as float and shares as int.
    """
    if not isinstance(holding.symbol, str) or not holding.symbol.strip():
        raise ValidationError("symbol must be a non-empty string", field="symbol")

    if not _is_number(holding.price) or not math.isfinite(holding.price):
        raise ValidationError(f"price must be a finite number, got {holding.price!r}", field="price")
    if holding.price < 0:
        raise ValidationError(f"price must be >= 0, got {holding.price}", field="price")

    if not _is_number(holding.change_percent) or not math.isfinite(holding.change_percent):
        raise ValidationError(
            f"change_percent must be a finite number, got {holding.change_percent!r}",
            field="change_percent",
        )

    shares = holding.shares
    if not _is_number(shares) or not math.isfinite(shares) or shares != int(shares):
        raise ValidationError(f"shares must be an integer, got {shares!r}", field="shares")
    if shares <= 0:
        raise ValidationError(f"shares must be > 0, got {shares}", field="shares")

    return replace(
        holding,
        price=float(holding.price),
        change_percent=float(holding.change_percent),
        shares=int(shares),
    )


def check_patch(patch: Dict[str, Any]) -> None:
    """Reject patch keys that are not editable Holding fields."""
    if "id" in patch:
        raise ValidationError("id cannot be changed", field="id")
    unknown = sorted(set(patch) - set(HOLDING_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown holding fields: {', '.join(unknown)}", field=unknown[0])
