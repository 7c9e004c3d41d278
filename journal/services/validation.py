"""Trade submission validation.

Narrows an untyped JSON body into a `TradeCreate`. Each field is coerced with
a pydantic `TypeAdapter`; validation stops at the first violation and raises
a `TradeValidationError` subclass naming the field (camelCase, as the client
sent it).
"""

import math
from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from typing import Annotated, Any

from pydantic import Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_snake

from journal.errors import (
    InconsistentTradeError,
    InvalidDateError,
    InvalidNumberError,
    InvalidTextError,
    MissingFieldError,
)
from journal.schemas.trade import TradeCreate
from journal.services.pnl import Outcome, compute_pnl
from journal.utils.constants import (
    PNL_ABS_TOLERANCE,
    PNL_REL_TOLERANCE,
    REQUIRED_FIELDS,
)

_finite_float = TypeAdapter(Annotated[float, Field(allow_inf_nan=False)])
_timestamp = TypeAdapter(datetime)
_calendar_date = TypeAdapter(date)


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    """Fetch a field by its camelCase name, falling back to snake_case."""
    if field in raw:
        return raw[field]
    return raw.get(to_snake(field))


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _optional(raw: Mapping[str, Any], field: str) -> Any:
    value = _lookup(raw, field)
    return None if _is_blank(value) else value


def parse_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidTextError(field)
    return value.strip()


def parse_number(field: str, value: Any) -> float:
    """Coerce an int, float or numeric string to a finite float."""
    # bool is an int subclass; true/false is never a price
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidNumberError(field)
    if isinstance(value, str):
        value = value.strip()
    try:
        number = _finite_float.validate_python(value)
    except (ValidationError, OverflowError):
        # ints past float range fail one way or the other depending on size
        raise InvalidNumberError(field) from None
    if not math.isfinite(number):
        raise InvalidNumberError(field)
    return number


def parse_date(field: str, value: Any) -> datetime:
    """Parse an ISO-8601 timestamp or calendar date; naive values are taken as UTC."""
    # Bare numbers, quoted or not, would otherwise be read as unix timestamps
    if not isinstance(value, (str, datetime)):
        raise InvalidDateError(field)
    if isinstance(value, str):
        value = value.strip()
        if value.lstrip("+-").replace(".", "", 1).isdigit():
            raise InvalidDateError(field)
    try:
        parsed = _timestamp.validate_python(value)
    except ValidationError:
        try:
            parsed = datetime.combine(_calendar_date.validate_python(value), time())
        except ValidationError:
            raise InvalidDateError(field) from None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def validate_trade(raw: Mapping[str, Any]) -> TradeCreate:
    """Validate a trade submission and derive its pnl and outcome.

    Raises:
        MissingFieldError: a required field is absent or blank.
        InvalidTextError: cryptoName, reason or notes is not a string.
        InvalidNumberError: a numeric field is not a finite number,
            positionSize is not positive, or the resulting pnl overflows.
        InvalidDateError: a date field is not an ISO-8601 timestamp.
        InconsistentTradeError: exit fields are not jointly present, the exit
            precedes the entry, or a supplied pnl/outcome disagrees with the
            computed one.
    """
    if not isinstance(raw, Mapping):
        raise InconsistentTradeError(None, "Request body must be a JSON object")

    for field in REQUIRED_FIELDS:
        if _is_blank(_lookup(raw, field)):
            raise MissingFieldError(field)

    crypto_name = parse_text("cryptoName", _lookup(raw, "cryptoName"))
    entry_date = parse_date("entryDate", _lookup(raw, "entryDate"))
    entry_price = parse_number("entryPrice", _lookup(raw, "entryPrice"))
    position_size = parse_number("positionSize", _lookup(raw, "positionSize"))
    if position_size <= 0:
        raise InvalidNumberError("positionSize", "must be greater than zero")
    reason = parse_text("reason", _lookup(raw, "reason"))

    exit_date_raw = _optional(raw, "exitDate")
    exit_price_raw = _optional(raw, "exitPrice")
    exit_date = parse_date("exitDate", exit_date_raw) if exit_date_raw is not None else None
    exit_price = parse_number("exitPrice", exit_price_raw) if exit_price_raw is not None else None

    if (exit_date is None) != (exit_price is None):
        missing = "exitPrice" if exit_price is None else "exitDate"
        raise InconsistentTradeError(
            missing, "exitDate and exitPrice must be provided together"
        )
    if exit_date is not None and exit_date < entry_date:
        raise InconsistentTradeError("exitDate", "exitDate must not be before entryDate")

    result = compute_pnl(entry_price, exit_price, position_size)
    # Finite inputs can still overflow once subtracted and multiplied
    if not math.isfinite(result.pnl):
        raise InvalidNumberError("positionSize", "pnl is not a finite number")

    supplied_pnl = _optional(raw, "pnl")
    if supplied_pnl is not None:
        pnl = parse_number("pnl", supplied_pnl)
        if not math.isclose(
            pnl, result.pnl, rel_tol=PNL_REL_TOLERANCE, abs_tol=PNL_ABS_TOLERANCE
        ):
            raise InconsistentTradeError(
                "pnl", f"pnl {pnl} does not match computed value {result.pnl}"
            )

    supplied_outcome = _optional(raw, "outcome")
    if supplied_outcome is not None and supplied_outcome != result.outcome.value:
        labels = [o.value for o in Outcome]
        if supplied_outcome not in labels:
            message = f"outcome must be one of: {', '.join(labels)}"
        else:
            message = f"outcome {supplied_outcome} does not match computed value {result.outcome.value}"
        raise InconsistentTradeError("outcome", message)

    notes = _optional(raw, "notes")

    return TradeCreate(
        crypto_name=crypto_name,
        entry_date=entry_date,
        exit_date=exit_date,
        entry_price=entry_price,
        exit_price=exit_price,
        position_size=position_size,
        pnl=result.pnl,
        outcome=result.outcome,
        reason=reason,
        notes=parse_text("notes", notes) if notes is not None else None,
    )
