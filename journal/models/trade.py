"""Trade model — one journal entry, immutable once recorded."""

import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    crypto_name: str = Field(index=True)
    entry_date: datetime
    exit_date: datetime | None = None
    entry_price: float
    exit_price: float | None = None
    position_size: float
    pnl: float = 0.0
    outcome: str = "Breakeven"  # "Profit", "Loss" or "Breakeven"
    reason: str
    notes: str | None = None
    user_id: int = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)
