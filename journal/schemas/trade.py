"""Pydantic schemas for Trade API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from journal.services.pnl import Outcome

_camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TradeCreate(BaseModel):
    """A submission that passed validation, with pnl/outcome already derived."""

    crypto_name: str = Field(min_length=1)
    entry_date: datetime
    exit_date: datetime | None = None
    entry_price: float
    exit_price: float | None = None
    position_size: float = Field(gt=0)
    pnl: float = 0.0
    outcome: Outcome = Outcome.BREAKEVEN
    reason: str = Field(min_length=1)
    notes: str | None = None

    model_config = _camel_config


class TradeRead(BaseModel):
    id: str
    crypto_name: str
    entry_date: datetime
    exit_date: datetime | None
    entry_price: float
    exit_price: float | None
    position_size: float
    pnl: float
    outcome: Outcome
    reason: str
    notes: str | None
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class TradeSummary(BaseModel):
    total_trades: int
    open_trades: int
    closed_trades: int
    wins: int
    losses: int
    breakeven: int
    total_pnl: float
    win_rate: float  # percent of closed trades that were profitable

    model_config = _camel_config
