# Overview: Service-layer operations for the transaction ledger.

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..errors import NotFoundError, StoreError, ValidationError
from ..extensions import db
from ..models import Transaction, TransactionKind
from ..validation import optional_text, parse_amount_cents, parse_positive_id, require_text

"""
Ledger Invariants (authoritative)

- Append-only: entries are inserted and deleted, never updated.
- amount_cents > 0; direction is carried by kind alone.
- id and created_at are assigned by the server.
- Listing order is created_at desc, id desc (id breaks same-instant ties).
- Deleting is a hard delete of one row; no cascade, no tombstone.
- Who may record for which owner is decided by the route, not here.
"""

logger = logging.getLogger(__name__)


def parse_kind(value: Any) -> TransactionKind:
    if not isinstance(value, str):
        raise ValidationError(f"kind must be one of: {', '.join(TransactionKind.values())}")
    try:
        return TransactionKind(value.strip().lower())
    except ValueError:
        raise ValidationError(f"kind must be one of: {', '.join(TransactionKind.values())}")


def record_transaction(
    *,
    owner_id: Any,
    owner_name: Any,
    amount: Any,
    kind: Any,
    description: Any = None,
) -> Transaction:
    """
    Validate and append one ledger entry.

    All validation happens before the INSERT.
    """
    owner_id = parse_positive_id("ownerId", owner_id)
    owner_name = require_text("ownerName", owner_name)
    amount_cents = parse_amount_cents(amount)
    kind = parse_kind(kind)
    description = optional_text("description", description)

    tx = Transaction(
        owner_id=owner_id,
        owner_name=owner_name,
        amount_cents=amount_cents,
        kind=kind.value,
        description=description,
    )
    try:
        db.session.add(tx)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc

    logger.info("Recorded %s of %s cents for owner %s (id=%s)", tx.kind, tx.amount_cents, owner_id, tx.id)
    return tx


def _ordered(query):
    return query.order_by(Transaction.created_at.desc(), Transaction.id.desc())


def list_by_owner(owner_id: int, kind: Optional[TransactionKind] = None) -> list[Transaction]:
    """One owner's entries, newest first."""
    try:
        q = db.session.query(Transaction).filter(Transaction.owner_id == owner_id)
        if kind is not None:
            q = q.filter(Transaction.kind == kind.value)
        return _ordered(q).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc


def list_all(kind: Optional[TransactionKind] = None) -> list[Transaction]:
    """Every entry across owners (including deleted accounts), newest first."""
    try:
        q = db.session.query(Transaction)
        if kind is not None:
            q = q.filter(Transaction.kind == kind.value)
        return _ordered(q).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc


def remove_transaction(transaction_id: int) -> None:
    """
    Hard-delete one entry by id.

    A second call for the same id raises NotFoundError.
    """
    try:
        deleted = (
            db.session.query(Transaction)
            .filter(Transaction.id == transaction_id)
            .delete(synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc

    if not deleted:
        raise NotFoundError("Transaction not found")

    logger.info("Removed transaction %s", transaction_id)
