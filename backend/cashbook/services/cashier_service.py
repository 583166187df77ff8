# Overview: Service-layer operations for the cashier directory.

"""
Cashier Directory

Admin-only CRUD over cashier accounts (the role check happens in the
route decorators, not here).

DESIGN:
- create is one INSERT; the (role, email) unique constraint decides
  duplicates, so two concurrent creates cannot both succeed
- delete removes the account row only; ledger entries keep owner_id and
  owner_name and remain listed
- admin rows are invisible here: listing, creating and deleting all
  filter on role=cashier
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import DuplicateEmail, NotFoundError, StoreError
from ..extensions import db
from ..models import Account, Role
from . import auth_service

logger = logging.getLogger(__name__)


def list_cashiers() -> list[Account]:
    """Cashier accounts, newest first."""
    try:
        return (
            db.session.query(Account)
            .filter(Account.role == Role.CASHIER.value)
            .order_by(Account.created_at.desc(), Account.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc


def count_cashiers() -> int:
    try:
        return db.session.query(Account).filter(Account.role == Role.CASHIER.value).count()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc


def create_cashier(name: str, email: str, secret: str) -> Account:
    """
    Register a cashier.

    Raises:
        ValidationError: blank field or malformed email (before any store call)
        DuplicateEmail: a cashier with this email already exists
        StoreError: any other store failure
    """
    try:
        account = auth_service.create_account(Role.CASHIER, name, email, secret)
    except IntegrityError as exc:
        db.session.rollback()
        raise DuplicateEmail() from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc

    logger.info("Created cashier %s (%s)", account.id, account.email)
    return account


def delete_cashier(cashier_id: int) -> None:
    """
    Delete a cashier account by id.

    The DELETE is filtered on role so an admin id is reported as not found.
    Raises NotFoundError when no cashier row was removed.
    """
    try:
        deleted = (
            db.session.query(Account)
            .filter(Account.id == cashier_id, Account.role == Role.CASHIER.value)
            .delete(synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc

    if not deleted:
        raise NotFoundError("Cashier not found")

    logger.info("Deleted cashier %s", cashier_id)
