"""
Boundary validation shared by the module DTOs.

Records arrive from forms and loosely-typed stores; these helpers turn
their fields into the exact types the engines expect, or raise a typed
``ValidationError``.  Engines never re-validate.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from hr_kernel.db.types import money_from_str
from hr_kernel.exceptions import (
    InvalidQuantityError,
    InvalidRecordError,
    NegativeAmountError,
)


def to_amount(record_type: str, field_name: str, value: Any) -> Decimal:
    """Non-negative Decimal from a Decimal, int or numeric string."""
    if isinstance(value, bool) or value is None:
        raise InvalidRecordError(record_type, field_name, "a monetary amount is required")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, str):
        try:
            amount = money_from_str(value)
        except ValueError as exc:
            raise InvalidRecordError(record_type, field_name, str(exc)) from exc
    else:
        # float is rejected: money never passes through binary floating point
        raise InvalidRecordError(
            record_type, field_name, f"unsupported amount type {type(value).__name__}"
        )
    if not amount.is_finite():
        raise InvalidRecordError(record_type, field_name, "amount must be finite")
    if amount < 0:
        raise NegativeAmountError(field_name, amount)
    return amount


def to_date(record_type: str, field_name: str, value: Any) -> date:
    """Calendar date from a date, datetime or ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise InvalidRecordError(record_type, field_name, str(exc)) from exc
    raise InvalidRecordError(record_type, field_name, "a calendar date is required")


def to_quantity(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuantityError(value)
    if value < 1:
        raise InvalidQuantityError(value)
    return value


def require_text(record_type: str, field_name: str, value: Any) -> str:
    """Non-blank string, stripped."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidRecordError(record_type, field_name, "a non-empty value is required")
    return value.strip()
