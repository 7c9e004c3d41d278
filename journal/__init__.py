"""Crypto trade journal: record trades, derive PnL, and serve them over HTTP."""
