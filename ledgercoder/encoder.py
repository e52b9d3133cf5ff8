"""Arithmetic-coding encoder producing fixed-point codeword amounts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import List, Tuple

from .amounts import try_parse_amount
from .model import DEFAULT_RANGE_TABLE, RangeTable

logger = logging.getLogger(__name__)

MAX_SYMBOLS_PER_CODEWORD = 7

# Wide enough that products of every interval bound in a chunk stay exact.
CODING_PRECISION = 200


class ChunkUnencodableError(ValueError):
    """Raised when no chunk length yields a representable codeword."""

    def __init__(self, position: int) -> None:
        super().__init__(f"unable to encode the chunk starting at position {position}")
        self.position = position


@dataclass(frozen=True)
class ChunkAttempt:
    """Outcome of coding one candidate chunk.

    Exactly one of ``amount`` or ``reason`` is set.
    """

    text: str
    amount: int | None = None
    candidate: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.amount is not None


def _fraction_digits(value: Decimal) -> str:
    """Return the digits after the decimal point of *value* in plain form."""

    rendered = format(value, "f")
    return rendered.partition(".")[2].rstrip("0")


def shortest_representative(low: Decimal, high: Decimal) -> str:
    """Return the shortest decimal string ``D`` with ``low <= D < high``.

    Leading digits shared by both bounds are copied.  At the first differing
    digit the high digit is taken unless that would make ``D`` equal to
    ``high``; in that case the low digit is kept and the remaining low digits
    are walked, copying nines and bumping the first other digit.
    """

    low_digits = _fraction_digits(low)
    high_digits = _fraction_digits(high)
    output = "0."

    for position in range(min(len(low_digits), len(high_digits))):
        low_digit = low_digits[position]
        high_digit = high_digits[position]
        if low_digit == high_digit:
            output += low_digit
        elif Decimal(output + high_digit) == high:
            output += low_digit
            for digit in low_digits[position + 1 :]:
                if digit == "9":
                    output += digit
                else:
                    output += str(int(digit) + 1)
                    break
            break
        else:
            output += high_digit
            break
    return output


class MessageEncoder:
    """Turn alphabet-only messages into ordered codeword amounts.

    Callers are responsible for keeping the terminator and any character
    outside the range table out of the message (see
    :func:`ledgercoder.text.validate_message`).
    """

    def __init__(
        self,
        table: RangeTable = DEFAULT_RANGE_TABLE,
        max_symbols_per_codeword: int = MAX_SYMBOLS_PER_CODEWORD,
    ) -> None:
        if max_symbols_per_codeword < 1:
            raise ValueError("max_symbols_per_codeword must be at least 1")
        self.table = table
        self.max_symbols_per_codeword = max_symbols_per_codeword

    def encode(self, message: str) -> List[int]:
        """Encode *message* into codeword amounts (1e-8 units).

        Each chunk starts at the longest allowed length and shrinks by one
        symbol until it fits the eight-digit ceiling.  If even a single symbol
        cannot be coded the whole call fails with
        :class:`ChunkUnencodableError` and no partial result is returned.
        """

        codewords: List[int] = []
        position = 0
        while position < len(message):
            attempt_length = self.max_symbols_per_codeword
            attempt = self.try_encode(message[position : position + attempt_length])
            while not attempt.ok:
                logger.debug(
                    "Chunk %r at %d rejected: %s", attempt.text, position, attempt.reason
                )
                attempt_length -= 1
                if attempt_length <= 0:
                    raise ChunkUnencodableError(position)
                attempt = self.try_encode(message[position : position + attempt_length])

            assert attempt.amount is not None
            codewords.append(attempt.amount)
            position += len(attempt.text)

        logger.debug("Encoded %d symbols into %d codewords", len(message), len(codewords))
        return codewords

    def try_encode(self, chunk: str) -> ChunkAttempt:
        """Code ``chunk`` plus the terminator and validate the result."""

        try:
            low, high = self.interval(chunk + self.table.terminator)
        except KeyError as exc:
            return ChunkAttempt(text=chunk, reason=f"symbol {exc.args[0]!r} is not in the table")

        if high >= 1:
            return ChunkAttempt(text=chunk, reason="interval reaches the upper bound 1")
        candidate = shortest_representative(low, high)
        amount = try_parse_amount(candidate)
        if amount is None:
            return ChunkAttempt(
                text=chunk, candidate=candidate, reason=f"{candidate} is not a valid amount"
            )
        return ChunkAttempt(text=chunk, amount=amount, candidate=candidate)

    def interval(self, symbols: str) -> Tuple[Decimal, Decimal]:
        """Run the forward arithmetic-coding recurrence over *symbols*."""

        low, high = Decimal(0), Decimal(1)
        with localcontext() as ctx:
            ctx.prec = CODING_PRECISION
            for symbol in symbols:
                entry = self.table.range_for(symbol)
                width = high - low
                low, high = low + width * entry.low, low + width * entry.high
        return low, high


def encode_message(message: str, table: RangeTable = DEFAULT_RANGE_TABLE) -> List[int]:
    """Encode *message* with a default-sized :class:`MessageEncoder`."""

    return MessageEncoder(table).encode(message)
