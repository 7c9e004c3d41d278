"""Pydantic schemas for the crypto catalogue API."""

from pydantic import BaseModel


class CryptoOptionRead(BaseModel):
    value: str  # CoinGecko id
    label: str
    symbol: str

    model_config = {"from_attributes": True}
