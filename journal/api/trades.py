"""Trade journal API: record trades and read them back, scoped to the current user."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from journal.api.deps import get_current_user
from journal.config import settings
from journal.database import get_session
from journal.errors import TradeValidationError
from journal.models.trade import Trade
from journal.models.user import User
from journal.schemas.trade import TradeRead, TradeSummary
from journal.services.pnl import Outcome
from journal.services.validation import validate_trade
from journal.utils.constants import SORTABLE_COLUMNS, SORT_ORDERS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trades", tags=["trades"])


@router.get("", response_model=list[TradeRead])
def list_trades(
    crypto: str | None = None,
    outcome: Outcome | None = None,
    sort: str = "createdAt",
    order: str = "desc",
    limit: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(default=0, ge=0),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    if sort not in SORTABLE_COLUMNS:
        allowed = ", ".join(SORTABLE_COLUMNS)
        raise HTTPException(status_code=400, detail=f"sort must be one of: {allowed}")
    if order not in SORT_ORDERS:
        raise HTTPException(status_code=400, detail="order must be asc or desc")

    column = col(getattr(Trade, SORTABLE_COLUMNS[sort]))
    stmt = select(Trade).where(Trade.user_id == user.id)
    if crypto:
        stmt = stmt.where(col(Trade.crypto_name).ilike(f"%{crypto.strip()}%"))
    if outcome is not None:
        stmt = stmt.where(Trade.outcome == outcome.value)

    stmt = stmt.order_by(column.asc() if order == "asc" else column.desc())
    # Stable pages when the sort column has ties
    stmt = stmt.order_by(col(Trade.created_at).desc(), col(Trade.id))
    stmt = stmt.offset(offset).limit(limit)
    return session.exec(stmt).all()


@router.post("", response_model=TradeRead, status_code=201)
def create_trade(
    payload: Any = Body(default=None),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    try:
        data = validate_trade(payload if payload is not None else {})
    except TradeValidationError as e:
        logger.info(f"Rejected trade from user {user.id}: {e.message}")
        raise HTTPException(status_code=400, detail={"field": e.field, "message": e.message})

    trade = Trade(
        **data.model_dump(exclude={"outcome"}),
        outcome=data.outcome.value,
        user_id=user.id,
    )
    session.add(trade)
    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception(f"Failed to save trade for user {user.id}")
        raise HTTPException(status_code=500, detail="Internal server error")
    session.refresh(trade)

    logger.info(
        f"Recorded trade {trade.id} for user {user.id}: "
        f"{trade.crypto_name} {trade.outcome} pnl={trade.pnl}"
    )
    return trade


@router.get("/summary", response_model=TradeSummary)
def trade_summary(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Aggregate stats over the current user's journal."""
    trades = session.exec(select(Trade).where(Trade.user_id == user.id)).all()

    closed = [t for t in trades if t.exit_price is not None]
    wins = sum(1 for t in closed if t.outcome == Outcome.PROFIT.value)
    losses = sum(1 for t in closed if t.outcome == Outcome.LOSS.value)
    win_rate = wins / len(closed) * 100 if closed else 0.0

    return TradeSummary(
        total_trades=len(trades),
        open_trades=len(trades) - len(closed),
        closed_trades=len(closed),
        wins=wins,
        losses=losses,
        breakeven=len(closed) - wins - losses,
        total_pnl=sum(t.pnl for t in trades),
        win_rate=round(win_rate, 1),
    )


@router.get("/{trade_id}", response_model=TradeRead)
def get_trade(
    trade_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    # Another user's trade is indistinguishable from a missing one
    trade = session.exec(
        select(Trade).where(Trade.id == trade_id, Trade.user_id == user.id)
    ).first()
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    return trade
