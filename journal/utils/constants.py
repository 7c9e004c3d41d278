"""Shared constants for trade validation and listing."""

# Required submission fields, in the order they are checked
REQUIRED_FIELDS = ["cryptoName", "entryDate", "entryPrice", "positionSize", "reason"]

# Wire name -> Trade column for ?sort=
SORTABLE_COLUMNS: dict[str, str] = {
    "createdAt": "created_at",
    "entryDate": "entry_date",
    "exitDate": "exit_date",
    "cryptoName": "crypto_name",
    "pnl": "pnl",
    "entryPrice": "entry_price",
    "exitPrice": "exit_price",
}

SORT_ORDERS = ["asc", "desc"]

# Tolerance when comparing a caller-supplied pnl with the computed one
PNL_ABS_TOLERANCE = 1e-9
PNL_REL_TOLERANCE = 1e-9
