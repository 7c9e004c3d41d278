"""Database models."""

from journal.models.trade import Trade
from journal.models.user import User

__all__ = [
    "Trade",
    "User",
]
