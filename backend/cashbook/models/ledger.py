from __future__ import annotations

import enum

from ..extensions import db
from ..time_utils import utcnow, to_utc_z
from ..validation import cents_to_number


class TransactionKind(str, enum.Enum):
    """Closed set of ledger entry kinds. Direction lives in balance_service."""
    SALE = "sale"
    REFUND = "refund"
    VOID = "void"
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def values(cls) -> list[str]:
        return [k.value for k in cls]


class Transaction(db.Model):
    """
    One ledger entry recorded by (or for) a cashier.

    APPEND-ONLY: rows are inserted and deleted, never updated.
    amount_cents is always positive; the sign comes from kind.
    owner_id deliberately has no foreign key so entries outlive the
    account; owner_name is the denormalized display label.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        db.CheckConstraint("amount_cents > 0", name="ck_transactions_amount_positive"),
        db.CheckConstraint(
            "kind IN ('sale', 'refund', 'void', 'income', 'expense')",
            name="ck_transactions_kind",
        ),
        db.Index("ix_transactions_owner_created", "owner_id", "created_at"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, nullable=False, index=True)
    owner_name = db.Column(db.String(120), nullable=False)
    amount_cents = db.Column(db.BigInteger, nullable=False)
    kind = db.Column(db.String(16), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    @property
    def kind_enum(self) -> TransactionKind:
        return TransactionKind(self.kind)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "ownerName": self.owner_name,
            "amount": cents_to_number(self.amount_cents),
            "amountCents": self.amount_cents,
            "kind": self.kind,
            "description": self.description,
            "createdAt": to_utc_z(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Transaction {self.id} {self.kind} {self.amount_cents}c owner={self.owner_id}>"
