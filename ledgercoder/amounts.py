"""Fixed-point adapter between codeword values and ledger amounts.

Ledger amounts are integer counts of 1e-8 units.  A codeword is only valid
when it fits that grid exactly and lies strictly between 0 and 1, which makes
this module the single authority on the precision ceiling the coder works
against.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

DECIMAL_PLACES = 8
UNITS_PER_COIN = 10**DECIMAL_PLACES

_AMOUNT_PATTERN = re.compile(r"^\+?\d+(?:\.\d*)?$|^\+?\.\d+$")


class AmountFormatError(ValueError):
    """Raised when a string is not a valid fixed-point codeword amount."""


def to_real(amount: int) -> Decimal:
    """Return the exact decimal value of *amount* 1e-8 units."""

    return Decimal(int(amount)).scaleb(-DECIMAL_PLACES)


def format_amount(amount: int) -> str:
    """Render *amount* with exactly eight fractional digits."""

    return f"{to_real(amount):.{DECIMAL_PLACES}f}"


def to_units(text: str) -> int:
    """Parse a plain decimal string into 1e-8 units without a range check.

    The string must be a non-negative plain decimal (no exponent) carrying at
    most eight fractional digits.
    """

    candidate = text.strip()
    if not _AMOUNT_PATTERN.match(candidate):
        raise AmountFormatError(f"amount {text!r} is not a plain non-negative decimal")
    try:
        value = Decimal(candidate)
    except InvalidOperation as exc:  # pragma: no cover - pattern already filters
        raise AmountFormatError(f"amount {text!r} is not a valid decimal") from exc

    fraction = candidate.partition(".")[2]
    if len(fraction) > DECIMAL_PLACES:
        raise AmountFormatError(
            f"amount {text!r} has more than {DECIMAL_PLACES} fractional digits"
        )
    return int(value.scaleb(DECIMAL_PLACES))


def from_decimal_string(text: str) -> int:
    """Validate *text* as a codeword and return its unit count.

    Raises :class:`AmountFormatError` unless the value is well formed, has at
    most eight fractional digits and lies strictly inside ``(0, 1)``.
    """

    units = to_units(text)
    if not is_codeword(units):
        raise AmountFormatError(f"amount {text!r} must lie strictly between 0 and 1")
    return units


def try_parse_amount(text: str) -> int | None:
    """Non-raising variant of :func:`from_decimal_string`."""

    try:
        return from_decimal_string(text)
    except AmountFormatError:
        return None


def is_codeword(amount: int) -> bool:
    return 0 < amount < UNITS_PER_COIN
