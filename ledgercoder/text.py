"""Caller-side helpers for preparing message text before encoding.

The coder itself trusts its input.  These helpers are the explicit
validation step callers use to keep unknown characters, and the terminator in
particular, out of the encoder.
"""

from __future__ import annotations

from .model import DEFAULT_RANGE_TABLE, RangeTable

_ALLOWED_CHARACTERS = frozenset("abcdefghijklmnopqrstuvwxyz ")


class InvalidInputSymbolError(ValueError):
    """Raised when message text contains a symbol the coder cannot model."""

    def __init__(self, symbol: str, index: int) -> None:
        super().__init__(f"unsupported character {symbol!r} at position {index}")
        self.symbol = symbol
        self.index = index


def sanitize_message(text: str) -> str:
    """Lower-case *text* and keep only ``a``-``z`` and plain spaces."""

    return "".join(char for char in text.lower() if char in _ALLOWED_CHARACTERS)


def validate_message(text: str, table: RangeTable = DEFAULT_RANGE_TABLE) -> str:
    """Return *text* unchanged if every character is a message symbol of *table*."""

    allowed = table.message_symbols
    for index, char in enumerate(text):
        if char not in allowed:
            raise InvalidInputSymbolError(char, index)
    return text
