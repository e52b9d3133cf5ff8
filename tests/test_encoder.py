from __future__ import annotations

from decimal import Decimal

import pytest

from ledgercoder.encoder import (
    ChunkUnencodableError,
    MessageEncoder,
    encode_message,
    shortest_representative,
)
from ledgercoder.model import FrequencyTable, build_range_table


def test_single_letter_interval_and_codeword() -> None:
    encoder = MessageEncoder()

    low, high = encoder.interval("a.")
    assert low == Decimal("0.05689278")
    assert high == Decimal("0.0609")

    attempt = encoder.try_encode("a")
    assert attempt.ok
    assert attempt.candidate == "0.06"
    assert attempt.amount == 6000000
    assert encode_message("a") == [6000000]


def test_empty_message_has_no_codewords() -> None:
    assert MessageEncoder().encode("") == []


@pytest.mark.parametrize(
    "low, high, expected",
    [
        ("0.05689278", "0.0609", "0.06"),
        ("0.92619214", "0.9342", "0.93"),
        # taking the high digit would equal high, so bump the low digits
        ("0.0123", "0.013", "0.0124"),
        ("0.81248026", "0.8125", "0.81249"),
        ("0.0499", "0.05", "0.0499"),
        ("0.123", "0.1234", "0.123"),
    ],
)
def test_shortest_representative(low: str, high: str, expected: str) -> None:
    result = shortest_representative(Decimal(low), Decimal(high))

    assert result == expected
    assert Decimal(low) <= Decimal(result) < Decimal(high)


def test_overlong_chunks_shrink_until_they_fit() -> None:
    encoder = MessageEncoder()

    assert not encoder.try_encode("zzz").ok
    assert not encoder.try_encode("zz").ok
    assert encoder.try_encode("z").candidate == "0.81249"
    assert encoder.encode("zzz") == [81249000, 81249000, 81249000]


def test_rejected_attempt_reports_reason() -> None:
    attempt = MessageEncoder().try_encode("zz")

    assert attempt.amount is None
    assert attempt.candidate == "0.812443745"
    assert "not a valid amount" in attempt.reason


def test_chunks_never_exceed_symbol_limit() -> None:
    message = "the quick brown fox jumps over the lazy dog"
    codewords = MessageEncoder().encode(message)

    assert len(codewords) >= len(message) / 7
    assert all(0 < codeword < 100_000_000 for codeword in codewords)


def test_smaller_symbol_limit_produces_more_codewords() -> None:
    message = "hello world"

    assert len(MessageEncoder(max_symbols_per_codeword=1).encode(message)) == len(message)


def test_unrepresentable_chunk_fails_whole_message() -> None:
    table = build_range_table(
        FrequencyTable.from_pairs(
            [("b", "0.5"), ("a", "0.000000001"), (".", "0.4")], terminator="."
        )
    )
    encoder = MessageEncoder(table)

    assert encoder.encode("b") != []
    with pytest.raises(ChunkUnencodableError) as excinfo:
        encoder.encode("bba")
    assert excinfo.value.position == 2


def test_symbol_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        MessageEncoder(max_symbols_per_codeword=0)
