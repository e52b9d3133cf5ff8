"""Tests for message payment plans and received-payment reassembly."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from ledgercoder.decoder import MessageDecoder
from ledgercoder.encoder import MessageEncoder
from ledgercoder.plan import (
    ReceivedPayment,
    collect_codewords,
    decode_received,
    format_plan,
    plan_message,
)


def test_plan_message_lists_one_payment_per_codeword() -> None:
    plan = plan_message("a", "addr1", MessageEncoder())

    assert plan.amounts == [6000000]
    assert plan.transaction_count == 1
    assert plan.total_amount == 6000000
    outputs = plan.outputs()
    assert [(p.address, p.amount, p.index) for p in outputs] == [("addr1", 6000000, 0)]
    assert outputs[0].formatted_amount == "0.06000000"


def test_plan_totals_span_all_chunks() -> None:
    plan = plan_message("zzz", "addr1", MessageEncoder())

    assert plan.transaction_count == 3
    assert plan.total_amount == 3 * 81249000
    rendered = format_plan(plan)
    assert "transactions: 3" in rendered
    assert "total: 2.43747000" in rendered
    assert "2 | addr1 | 0.81249000" in rendered


def test_plan_message_rejects_empty_text() -> None:
    with pytest.raises(ValueError):
        plan_message("", "addr1", MessageEncoder())


def test_decode_received_orders_by_timestamp() -> None:
    base = datetime(2024, 3, 1, 12, 0, 0)
    payments = [
        ReceivedPayment(timestamp=base + timedelta(minutes=20), amount=81249000, address="me"),
        ReceivedPayment(timestamp=base, amount=6000000, address="me"),
        ReceivedPayment(timestamp=base + timedelta(minutes=5), amount=93000000, address="me"),
        ReceivedPayment(timestamp=base + timedelta(minutes=1), amount=6000000, address="other"),
    ]

    assert decode_received(payments, MessageDecoder(), address="me") == "a z"


def test_collect_codewords_filters_inclusive_date_range() -> None:
    payments = [
        ReceivedPayment(timestamp=datetime(2024, 2, 28, 23, 59), amount=1),
        ReceivedPayment(timestamp=datetime(2024, 3, 1, 0, 0), amount=2),
        ReceivedPayment(timestamp=datetime(2024, 3, 2, 23, 59), amount=3),
        ReceivedPayment(timestamp=datetime(2024, 3, 3, 0, 0), amount=4),
    ]

    assert collect_codewords(payments, start=date(2024, 3, 1), end=date(2024, 3, 2)) == [2, 3]


def test_collect_codewords_keeps_input_order_for_equal_timestamps() -> None:
    moment = datetime(2024, 3, 1, 8, 30)
    payments = [
        ReceivedPayment(timestamp=moment, amount=5),
        ReceivedPayment(timestamp=moment, amount=1),
        ReceivedPayment(timestamp=moment, amount=3),
    ]

    assert collect_codewords(payments) == [5, 1, 3]


def test_decode_received_returns_none_without_matches() -> None:
    payments = [ReceivedPayment(timestamp=datetime(2024, 3, 1), amount=6000000, address="x")]

    assert decode_received(payments, MessageDecoder(), address="y") is None
    assert decode_received([], MessageDecoder()) is None


def test_plan_round_trips_through_received_payments() -> None:
    message = "see you soon"
    plan = plan_message(message, "addr1", MessageEncoder())
    start = datetime(2024, 5, 1, 9, 0)
    payments = [
        ReceivedPayment(
            timestamp=start + timedelta(minutes=10 * payment.index),
            amount=payment.amount,
            address=payment.address,
            txid=f"tx-{payment.index}",
        )
        for payment in reversed(plan.outputs())
    ]

    assert decode_received(payments, MessageDecoder(), address="addr1") == message
