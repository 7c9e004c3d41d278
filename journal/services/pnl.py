"""Profit-and-loss calculation for journal trades."""

from enum import Enum
from typing import NamedTuple


class Outcome(str, Enum):
    PROFIT = "Profit"
    LOSS = "Loss"
    BREAKEVEN = "Breakeven"


class PnLResult(NamedTuple):
    pnl: float
    outcome: Outcome


def outcome_for(pnl: float) -> Outcome:
    """Classify a PnL amount by its sign."""
    if pnl > 0:
        return Outcome.PROFIT
    if pnl < 0:
        return Outcome.LOSS
    return Outcome.BREAKEVEN


def compute_pnl(
    entry_price: float,
    exit_price: float | None,
    position_size: float,
) -> PnLResult:
    """Compute PnL and outcome for a trade.

    Open positions (no exit price) are reported as zero PnL / Breakeven.
    No rounding is applied; formatting is left to the client.
    """
    if exit_price is None:
        return PnLResult(0.0, Outcome.BREAKEVEN)
    pnl = (exit_price - entry_price) * position_size
    return PnLResult(pnl, outcome_for(pnl))
