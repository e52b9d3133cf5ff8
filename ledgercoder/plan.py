"""Payment plans for outgoing messages and reassembly of received amounts.

A message leaves the wallet as one payment per codeword, sent in order to a
single address.  On the receiving side the amounts paid to that address are
collected in chronological order and fed back through the decoder.  Building
and broadcasting the actual transactions is left to wallet code.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List

from .amounts import format_amount
from .decoder import MessageDecoder
from .encoder import MessageEncoder

logger = logging.getLogger(__name__)


@dataclass
class PlannedPayment:
    """One payment carrying a single codeword."""

    address: str
    amount: int
    index: int

    @property
    def formatted_amount(self) -> str:
        return format_amount(self.amount)


@dataclass
class MessagePlan:
    """Ordered codeword payments that together carry ``message``."""

    message: str
    address: str
    amounts: List[int] = field(default_factory=list)

    @property
    def transaction_count(self) -> int:
        return len(self.amounts)

    @property
    def total_amount(self) -> int:
        return sum(self.amounts)

    def outputs(self) -> List[PlannedPayment]:
        return [
            PlannedPayment(address=self.address, amount=amount, index=index)
            for index, amount in enumerate(self.amounts)
        ]


def plan_message(message: str, address: str, encoder: MessageEncoder) -> MessagePlan:
    """Encode *message* and wrap the codewords as payments to *address*."""

    amounts = encoder.encode(message)
    if not amounts:
        raise ValueError("Cannot plan an empty message")
    plan = MessagePlan(message=message, address=address, amounts=amounts)
    logger.debug(
        "Planned %d payments totalling %s to %s",
        plan.transaction_count,
        format_amount(plan.total_amount),
        address,
    )
    return plan


def format_plan(plan: MessagePlan) -> str:
    """Render a plan as one line per payment followed by totals."""

    lines = ["index | address | amount"]
    for payment in plan.outputs():
        lines.append(f"{payment.index} | {payment.address} | {payment.formatted_amount}")
    lines.append(f"transactions: {plan.transaction_count}")
    lines.append(f"total: {format_amount(plan.total_amount)}")
    return "\n".join(lines)


@dataclass
class ReceivedPayment:
    """An amount observed on the ledger."""

    timestamp: datetime
    amount: int
    address: str | None = None
    txid: str | None = None


def collect_codewords(
    payments: Iterable[ReceivedPayment],
    *,
    address: str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> List[int]:
    """Return matching amounts ordered by timestamp.

    ``start`` and ``end`` are inclusive calendar dates.  Payments sharing a
    timestamp keep their input order.
    """

    selected: List[ReceivedPayment] = []
    for payment in payments:
        if address is not None and payment.address != address:
            continue
        day = payment.timestamp.date()
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        selected.append(payment)
    selected.sort(key=lambda payment: payment.timestamp)
    return [payment.amount for payment in selected]


def decode_received(
    payments: Iterable[ReceivedPayment],
    decoder: MessageDecoder,
    *,
    address: str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> str | None:
    """Decode the message carried by *payments*, or ``None`` if none matched."""

    amounts = collect_codewords(payments, address=address, start=start, end=end)
    if not amounts:
        return None
    logger.debug("Decoding %d received amounts", len(amounts))
    return decoder.decode(amounts)
