# Overview: Pytest coverage for balance derivation.

"""
Balance Aggregator tests.

Verifies:
- sale/income count as inflow, refund/expense as outflow
- void entries never move the balance but are counted
- results do not depend on input order
"""

import random

import pytest

from cashbook.models import Transaction, TransactionKind
from cashbook.services.balance_service import (
    INFLOW_KINDS,
    OUTFLOW_KINDS,
    direction,
    summarize,
)


def _tx(kind: str, cents: int) -> Transaction:
    return Transaction(owner_id=1, owner_name="Ada", kind=kind, amount_cents=cents, description="")


class TestPartition:

    def test_every_kind_has_exactly_one_direction(self):
        for kind in TransactionKind:
            assert not (kind in INFLOW_KINDS and kind in OUTFLOW_KINDS)

    def test_void_is_neutral(self):
        assert direction(TransactionKind.VOID) == 0
        assert TransactionKind.VOID not in INFLOW_KINDS
        assert TransactionKind.VOID not in OUTFLOW_KINDS

    @pytest.mark.parametrize("kind,expected", [
        (TransactionKind.SALE, 1),
        (TransactionKind.INCOME, 1),
        (TransactionKind.REFUND, -1),
        (TransactionKind.EXPENSE, -1),
    ])
    def test_direction(self, kind, expected):
        assert direction(kind) == expected


class TestSummarize:

    def test_empty(self):
        summary = summarize([])
        assert summary.total_in_cents == 0
        assert summary.total_out_cents == 0
        assert summary.balance_cents == 0
        assert summary.count == 0

    def test_sale_minus_expense(self):
        summary = summarize([_tx("sale", 50000), _tx("expense", 20000)])
        assert summary.total_in_cents == 50000
        assert summary.total_out_cents == 20000
        assert summary.balance_cents == 30000
        assert summary.count == 2

        body = summary.to_dict()
        assert body["totalIn"] == 500
        assert body["totalOut"] == 200
        assert body["balance"] == 300

    def test_void_counted_but_not_summed(self):
        summary = summarize([_tx("sale", 1000), _tx("void", 999999)])
        assert summary.balance_cents == 1000
        assert summary.total_in_cents == 1000
        assert summary.total_out_cents == 0
        assert summary.count == 2
        assert summary.by_kind_cents[TransactionKind.VOID] == 999999

    def test_balance_can_go_negative(self):
        summary = summarize([_tx("income", 100), _tx("refund", 250)])
        assert summary.balance_cents == -150
        assert summary.to_dict()["balance"] == -1.5

    def test_matches_formula_for_random_sets(self):
        rng = random.Random(1234)
        kinds = TransactionKind.values()
        for _ in range(50):
            txs = [_tx(rng.choice(kinds), rng.randint(1, 100000)) for _ in range(rng.randint(0, 40))]
            expected = (
                sum(t.amount_cents for t in txs if t.kind in ("sale", "income"))
                - sum(t.amount_cents for t in txs if t.kind in ("refund", "expense"))
            )
            assert summarize(txs).balance_cents == expected

            shuffled = list(txs)
            rng.shuffle(shuffled)
            assert summarize(shuffled) == summarize(txs)

    def test_cents_are_exact(self):
        # 0.1 + 0.2 style drift cannot happen on integer cents
        summary = summarize([_tx("sale", 10), _tx("sale", 20)])
        assert summary.to_dict()["totalIn"] == 0.3

    def test_by_kind_lists_every_kind(self):
        body = summarize([_tx("sale", 100)]).to_dict()
        assert set(body["byKind"]) == set(TransactionKind.values())
        assert body["byKind"]["sale"] == 1.0
        assert body["byKind"]["refund"] == 0.0
