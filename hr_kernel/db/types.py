"""
Module: hr_kernel.db.types
Responsibility: Parsing of monetary amounts arriving as text, shared by the
    module DTOs and anything that reads amounts from forms or files.
Architecture position: Kernel > DB.  May be imported by models and services.

Invariants enforced:
    CRITICAL: No floats for money.  All monetary amounts use Decimal with
    exact storage (see ``DecimalAmount`` in ``hr_kernel.db.base``).  No rounding
    helper exists here: derived benefit values are never rounded.
"""

from decimal import Decimal, InvalidOperation


def money_from_str(value: str) -> Decimal:
    """
    Create a monetary Decimal from string.

    Raises:
        ValueError: If value is not a valid, finite number.
    """
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid monetary amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid monetary amount: {value!r}")
    return amount
