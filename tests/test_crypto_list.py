"""Tests for the crypto catalogue: loading, search, refresh and API."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from journal.errors import CryptoListError
from journal.services import crypto_list
from journal.services.crypto_list import (
    CryptoOption,
    fetch_crypto_list,
    load_crypto_list,
    search_cryptos,
    update_crypto_list,
)

COINS = [
    {"id": "solana", "symbol": "sol", "name": "Solana"},
    {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"},
    {"id": "bitcoin-cash", "symbol": "bch", "name": "Bitcoin Cash"},
    {"id": "aave", "symbol": "aave", "name": "aave"},
    {"id": "", "symbol": "bad", "name": "No id"},
]


@pytest.fixture
def catalogue(tmp_path):
    path = tmp_path / "crypto-list.json"
    path.write_text(json.dumps(COINS), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _fresh_cache():
    crypto_list.reset_crypto_cache()
    yield
    crypto_list.reset_crypto_cache()


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


class TestLoadAndSearch:
    def test_sorted_by_label_case_insensitive(self, catalogue):
        options = load_crypto_list(catalogue)
        assert [o.label for o in options] == ["aave", "Bitcoin", "Bitcoin Cash", "Solana"]
        assert options[1] == CryptoOption(value="bitcoin", label="Bitcoin", symbol="BTC")

    def test_missing_file_is_empty(self, tmp_path):
        assert load_crypto_list(tmp_path / "nope.json") == []

    def test_search_by_symbol_and_name(self, catalogue):
        options = load_crypto_list(catalogue)
        assert [o.value for o in search_cryptos(options, "BTC")] == ["bitcoin"]
        assert [o.value for o in search_cryptos(options, "bitcoin")] == ["bitcoin", "bitcoin-cash"]

    def test_search_limit_and_blank_query(self, catalogue):
        options = load_crypto_list(catalogue)
        assert len(search_cryptos(options, "", limit=2)) == 2
        assert len(search_cryptos(options, "bitcoin", limit=1)) == 1


class TestRefresh:
    def test_fetch_success(self):
        with patch("journal.services.crypto_list.requests.get", return_value=_response(payload=COINS)) as get:
            assert fetch_crypto_list("https://example.test/coins") == COINS
        assert get.call_args.args[0] == "https://example.test/coins"

    def test_fetch_http_error(self):
        with patch("journal.services.crypto_list.requests.get", return_value=_response(429)):
            with pytest.raises(CryptoListError, match="429"):
                fetch_crypto_list("https://example.test/coins")

    def test_fetch_network_error(self):
        with patch(
            "journal.services.crypto_list.requests.get",
            side_effect=requests.ConnectionError("down"),
        ):
            with pytest.raises(CryptoListError):
                fetch_crypto_list("https://example.test/coins")

    def test_fetch_rejects_non_list(self):
        with patch("journal.services.crypto_list.requests.get", return_value=_response(payload={"error": "x"})):
            with pytest.raises(CryptoListError):
                fetch_crypto_list("https://example.test/coins")

    def test_update_writes_file(self, tmp_path):
        path = tmp_path / "data" / "crypto-list.json"
        with patch("journal.services.crypto_list.requests.get", return_value=_response(payload=COINS)):
            count = update_crypto_list(path, "https://example.test/coins")
        assert count == len(COINS)
        assert json.loads(path.read_text(encoding="utf-8")) == COINS


class TestCryptoApi:
    def test_search_endpoint(self, client, alice_headers, catalogue, monkeypatch):
        monkeypatch.setattr(crypto_list.settings, "crypto_list_path", catalogue)
        response = client.get("/api/cryptos", params={"q": "sol"}, headers=alice_headers)
        assert response.status_code == 200
        assert response.json() == [{"value": "solana", "label": "Solana", "symbol": "SOL"}]
