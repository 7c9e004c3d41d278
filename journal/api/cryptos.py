"""Crypto catalogue API — asset lookup for the trade form."""

from fastapi import APIRouter, Depends, Query

from journal.api.deps import get_current_user
from journal.schemas.crypto import CryptoOptionRead
from journal.services.crypto_list import get_crypto_options, search_cryptos

router = APIRouter(prefix="/api/cryptos", tags=["cryptos"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[CryptoOptionRead])
def list_cryptos(
    q: str = "",
    limit: int = Query(default=50, ge=1, le=500),
):
    return search_cryptos(get_crypto_options(), q, limit)
