"""
Holdings errors — recoverable failures raised at the edit boundary.

The presentation layer catches these and redisplays the form with the message.
"""
from typing import Optional


class PortfolioError(Exception):
    """Base class for all portfolio engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "message": self.message}


class ValidationError(PortfolioError):
    """A holding field holds an invalid value (shares <= 0, price < 0, ...)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["field"] = self.field
        return data


class NotFoundError(PortfolioError):
    """An operation referenced a holding id that is not in the live set."""

    def __init__(self, holding_id: str):
        super().__init__(f"Holding {holding_id} not found")
        self.holding_id = holding_id

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["holding_id"] = self.holding_id
        return data
