"""Decoder mapping codeword amounts back to message text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Iterable, List

from .amounts import is_codeword, to_real
from .encoder import CODING_PRECISION, MAX_SYMBOLS_PER_CODEWORD
from .model import DEFAULT_RANGE_TABLE, RangeTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedChunk:
    """Per-codeword decoding outcome.

    ``corrupt`` chunks never reached the terminator within the symbol limit
    (or were not a valid codeword at all) and always carry empty ``text``.
    """

    amount: int
    text: str
    corrupt: bool = False


class MessageDecoder:
    """Translate ordered codeword amounts back into plaintext.

    Corrupt codewords contribute nothing to :meth:`decode`; use
    :meth:`decode_chunks` to find out which ones were dropped.
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

    def decode(self, amounts: Iterable[int]) -> str:
        return "".join(chunk.text for chunk in self.decode_chunks(amounts))

    def decode_chunks(self, amounts: Iterable[int]) -> List[DecodedChunk]:
        chunks = [self.decode_amount(amount) for amount in amounts]
        dropped = sum(1 for chunk in chunks if chunk.corrupt)
        if dropped:
            logger.debug("Dropped %d corrupt codewords out of %d", dropped, len(chunks))
        return chunks

    def decode_amount(self, amount: int) -> DecodedChunk:
        """Decode one codeword, flagging it corrupt instead of raising."""

        if not is_codeword(amount):
            logger.warning("Ignoring amount %d outside the codeword range", amount)
            return DecodedChunk(amount=amount, text="", corrupt=True)

        text = self._decode_value(to_real(amount))
        if text is None:
            logger.debug("Codeword %d did not reach the terminator", amount)
            return DecodedChunk(amount=amount, text="", corrupt=True)
        return DecodedChunk(amount=amount, text=text)

    def _decode_value(self, value: Decimal) -> str | None:
        # Rescaling ``value`` into each chosen interval is done by narrowing
        # ``[low, high)`` instead, so every comparison stays exact.
        symbols: List[str] = []
        low, high = Decimal(0), Decimal(1)
        with localcontext() as ctx:
            ctx.prec = CODING_PRECISION
            while True:
                width = high - low
                for entry in self.table:
                    entry_low = low + width * entry.low
                    entry_high = low + width * entry.high
                    if entry_low <= value < entry_high:
                        break
                else:
                    return None

                if entry.symbol == self.table.terminator:
                    return "".join(symbols)
                symbols.append(entry.symbol)
                if len(symbols) > self.max_symbols_per_codeword:
                    return None
                low, high = entry_low, entry_high


def decode_amounts(amounts: Iterable[int], table: RangeTable = DEFAULT_RANGE_TABLE) -> str:
    """Decode *amounts* with a default-sized :class:`MessageDecoder`."""

    return MessageDecoder(table).decode(amounts)
