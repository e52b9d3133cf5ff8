"""Static probability model shared by the message encoder and decoder.

The frequency table is an ordered list of ``(symbol, weight)`` pairs.  Order is
part of the contract: the range table walks the pairs in sequence and hands out
contiguous sub-intervals of ``[0, 1)``, so an encoder and a decoder only agree
when they were built from byte-for-byte identical tables.

Weights are kept as :class:`~decimal.Decimal` values parsed from their literal
strings so that interval bounds are exact decimal fractions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Iterator, Tuple

DEFAULT_TERMINATOR = "."

# Relative frequencies of the lowercase letters and the space, followed by the
# reserved terminator.  The weights sum to exactly 1.
DEFAULT_FREQUENCIES: Tuple[Tuple[str, str], ...] = (
    ("a", "0.0609"),
    ("b", "0.0105"),
    ("c", "0.0284"),
    ("d", "0.0292"),
    ("e", "0.1136"),
    ("f", "0.0179"),
    ("g", "0.0138"),
    ("h", "0.0341"),
    ("i", "0.0544"),
    ("j", "0.0024"),
    ("k", "0.0041"),
    ("l", "0.0292"),
    ("m", "0.0276"),
    ("n", "0.0544"),
    ("o", "0.0600"),
    ("p", "0.0195"),
    ("q", "0.0024"),
    ("r", "0.0495"),
    ("s", "0.0568"),
    ("t", "0.0803"),
    ("u", "0.0243"),
    ("v", "0.0097"),
    ("w", "0.0138"),
    ("x", "0.0024"),
    ("y", "0.0130"),
    ("z", "0.0003"),
    (" ", "0.1217"),
    (DEFAULT_TERMINATOR, "0.0658"),
)


class FrequencyTableError(ValueError):
    """Raised when a frequency table cannot describe a valid partition."""


def _coerce_weight(symbol: str, raw: Any) -> Decimal:
    if isinstance(raw, bool):
        raise FrequencyTableError(f"weight for {symbol!r} must be numeric")
    try:
        # str() keeps YAML floats such as 0.0609 from dragging in binary noise
        weight = Decimal(str(raw))
    except InvalidOperation as exc:
        raise FrequencyTableError(f"invalid weight for {symbol!r}: {raw!r}") from exc
    if not weight.is_finite() or weight <= 0:
        raise FrequencyTableError(f"weight for {symbol!r} must be positive, got {raw!r}")
    return weight


@dataclass(frozen=True)
class FrequencyTable:
    """Ordered ``(symbol, weight)`` pairs describing the static model."""

    weights: Tuple[Tuple[str, Decimal], ...]
    terminator: str = DEFAULT_TERMINATOR

    @classmethod
    def default(cls) -> "FrequencyTable":
        """Return the English letter table used by every stock installation."""

        return cls.from_pairs(DEFAULT_FREQUENCIES, terminator=DEFAULT_TERMINATOR)

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[Tuple[str, Any]], *, terminator: str = DEFAULT_TERMINATOR
    ) -> "FrequencyTable":
        """Validate *pairs* and freeze them into a table.

        Symbols must be unique single characters, every weight must be
        positive, the terminator must be present and the cumulative weight may
        not exceed 1.
        """

        weights: list[Tuple[str, Decimal]] = []
        seen: set[str] = set()
        for symbol, raw_weight in pairs:
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise FrequencyTableError(f"symbols must be single characters, got {symbol!r}")
            if symbol in seen:
                raise FrequencyTableError(f"duplicate symbol {symbol!r} in frequency table")
            seen.add(symbol)
            weights.append((symbol, _coerce_weight(symbol, raw_weight)))

        if terminator not in seen:
            raise FrequencyTableError(f"terminator {terminator!r} missing from frequency table")
        total = sum((weight for _, weight in weights), Decimal(0))
        if total > 1:
            raise FrequencyTableError(f"frequency weights sum to {total}, which exceeds 1")
        return cls(weights=tuple(weights), terminator=terminator)

    @property
    def symbols(self) -> Tuple[str, ...]:
        return tuple(symbol for symbol, _ in self.weights)


@dataclass(frozen=True)
class SymbolRange:
    """Half-open ``[low, high)`` interval assigned to one symbol."""

    symbol: str
    weight: Decimal
    low: Decimal
    high: Decimal


@dataclass(frozen=True)
class RangeTable:
    """Partition of ``[0, 1)`` into per-symbol intervals, in table order."""

    entries: Tuple[SymbolRange, ...]
    terminator: str
    _by_symbol: Dict[str, SymbolRange] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_symbol", {entry.symbol: entry for entry in self.entries})

    def __iter__(self) -> Iterator[SymbolRange]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def range_for(self, symbol: str) -> SymbolRange:
        """Return the interval for *symbol*; ``KeyError`` for unknown symbols."""

        return self._by_symbol[symbol]

    @property
    def message_symbols(self) -> frozenset[str]:
        """Symbols a user message may contain (everything but the terminator)."""

        return frozenset(entry.symbol for entry in self.entries if entry.symbol != self.terminator)


def build_range_table(frequencies: FrequencyTable) -> RangeTable:
    """Accumulate *frequencies* into contiguous intervals.

    The first symbol starts at 0, each symbol's high bound is its low bound
    plus its weight, and the next symbol starts where the previous one ends.
    """

    entries: list[SymbolRange] = []
    low = Decimal(0)
    for symbol, weight in frequencies.weights:
        high = low + weight
        entries.append(SymbolRange(symbol=symbol, weight=weight, low=low, high=high))
        low = high
    return RangeTable(entries=tuple(entries), terminator=frequencies.terminator)


def format_range_table(table: RangeTable) -> str:
    """Return a human-readable listing of the symbol intervals."""

    lines = ["symbol | weight | low | high"]
    for entry in table:
        label = repr(entry.symbol) if entry.symbol.isspace() else entry.symbol
        if entry.symbol == table.terminator:
            label = f"{label} (terminator)"
        lines.append(f"{label} | {entry.weight} | {entry.low} | {entry.high}")
    return "\n".join(lines)


DEFAULT_FREQUENCY_TABLE = FrequencyTable.default()
DEFAULT_RANGE_TABLE = build_range_table(DEFAULT_FREQUENCY_TABLE)
