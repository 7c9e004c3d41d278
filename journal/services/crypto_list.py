"""Crypto catalogue used to pick the asset name of a trade.

The catalogue is the CoinGecko `/coins/list` payload saved to a local JSON
file. It is refreshed by the admin CLI and read lazily by the API.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import requests

from journal.config import settings
from journal.errors import CryptoListError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CryptoOption:
    value: str  # CoinGecko id, e.g. "bitcoin"
    label: str  # display name, e.g. "Bitcoin"
    symbol: str  # upper-cased ticker, e.g. "BTC"


_options: list[CryptoOption] | None = None


def load_crypto_list(path: Path) -> list[CryptoOption]:
    """Read the catalogue file and return options sorted by label."""
    if not path.exists():
        logger.warning(f"Crypto list not found at {path}; run `python -m journal.cli update-crypto-list`")
        return []

    with path.open(encoding="utf-8") as fh:
        coins = json.load(fh)

    options = []
    for coin in coins:
        coin_id = coin.get("id")
        name = coin.get("name")
        if not coin_id or not name:
            continue
        options.append(
            CryptoOption(value=coin_id, label=name, symbol=(coin.get("symbol") or "").upper())
        )
    options.sort(key=lambda o: o.label.casefold())
    return options


def get_crypto_options() -> list[CryptoOption]:
    """Cached catalogue for the API process."""
    global _options
    if _options is None:
        _options = load_crypto_list(settings.crypto_list_path)
        logger.info(f"Loaded {len(_options)} cryptocurrencies")
    return _options


def reset_crypto_cache():
    global _options
    _options = None


def search_cryptos(options: list[CryptoOption], query: str = "", limit: int = 50) -> list[CryptoOption]:
    """Case-insensitive match on label, symbol or id, in catalogue order."""
    needle = query.strip().casefold()
    if not needle:
        return options[:limit]

    matches = []
    for option in options:
        if (
            needle in option.label.casefold()
            or needle in option.symbol.casefold()
            or needle in option.value.casefold()
        ):
            matches.append(option)
            if len(matches) >= limit:
                break
    return matches


def fetch_crypto_list(url: str | None = None, timeout: float | None = None) -> list[dict]:
    """Download the coin list from CoinGecko."""
    url = url or settings.crypto_list_url
    try:
        response = requests.get(url, timeout=timeout or settings.crypto_list_timeout)
    except requests.RequestException as e:
        raise CryptoListError(f"Failed to fetch crypto list: {e}") from e

    if response.status_code != 200:
        raise CryptoListError(f"Failed to fetch crypto list: {response.status_code}")

    data = response.json()
    if not isinstance(data, list):
        raise CryptoListError("Unexpected crypto list payload: expected a JSON array")
    return data


def update_crypto_list(path: Path | None = None, url: str | None = None) -> int:
    """Fetch the latest coin list and overwrite the catalogue file. Returns the coin count."""
    path = path or settings.crypto_list_path
    coins = fetch_crypto_list(url)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(coins, fh, indent=2)

    reset_crypto_cache()
    logger.info(f"Saved {len(coins)} cryptocurrencies to {path}")
    return len(coins)
