# Overview: Pure balance derivation over a set of ledger entries.

"""
Balance Aggregator

The only place that knows which kinds raise or lower the balance:
- inflow:  sale, income
- outflow: refund, expense
- void:    neither (still counted)

Balances are never stored. Every view re-derives them from the full
entry list, so the displayed figure cannot drift from the ledger.
Sums are exact integer cents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..models import Transaction, TransactionKind
from ..validation import cents_to_number

INFLOW_KINDS = frozenset({TransactionKind.SALE, TransactionKind.INCOME})
OUTFLOW_KINDS = frozenset({TransactionKind.REFUND, TransactionKind.EXPENSE})


def direction(kind: TransactionKind) -> int:
    """+1 inflow, -1 outflow, 0 for void."""
    if kind in INFLOW_KINDS:
        return 1
    if kind in OUTFLOW_KINDS:
        return -1
    return 0


@dataclass(frozen=True)
class BalanceSummary:
    total_in_cents: int = 0
    total_out_cents: int = 0
    count: int = 0
    by_kind_cents: dict = field(default_factory=dict)

    @property
    def balance_cents(self) -> int:
        return self.total_in_cents - self.total_out_cents

    def to_dict(self) -> dict:
        return {
            "totalIn": cents_to_number(self.total_in_cents),
            "totalOut": cents_to_number(self.total_out_cents),
            "balance": cents_to_number(self.balance_cents),
            "count": self.count,
            "byKind": {
                kind.value: cents_to_number(self.by_kind_cents.get(kind, 0))
                for kind in TransactionKind
            },
        }


def summarize(transactions: Iterable[Transaction]) -> BalanceSummary:
    """Derive totals from any iterable of entries (order does not matter)."""
    total_in = 0
    total_out = 0
    count = 0
    by_kind = {kind: 0 for kind in TransactionKind}

    for tx in transactions:
        kind = tx.kind_enum
        count += 1
        by_kind[kind] += tx.amount_cents
        sign = direction(kind)
        if sign > 0:
            total_in += tx.amount_cents
        elif sign < 0:
            total_out += tx.amount_cents

    return BalanceSummary(
        total_in_cents=total_in,
        total_out_cents=total_out,
        count=count,
        by_kind_cents=by_kind,
    )
