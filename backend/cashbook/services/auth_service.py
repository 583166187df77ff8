# Overview: Service-layer operations for auth; encapsulates credential checks and hashing.

"""
Credential verification for admin and cashier logins.

SECURITY NOTES:
- Secrets hashed with bcrypt (cost factor from BCRYPT_ROUNDS, default 12)
- Lookup is by (role, email); the same email may exist once per role
- Unknown email and wrong secret are indistinguishable: same exception,
  same message, and an unknown email still pays for one bcrypt check
- No lockout/backoff: repeated failures are only logged
- bcrypt only reads 72 bytes: longer secrets are refused at creation and
  never match at login
- Tokens are issued separately (see session_service.py)
"""

import logging

import bcrypt
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import InvalidCredentials, StoreError, ValidationError
from ..extensions import db
from ..models import Account, Role
from ..validation import normalize_email, require_text

logger = logging.getLogger(__name__)

# bcrypt hashes of a throwaway secret, one per cost factor. Compared against
# when the email is unknown so both failure paths cost the same bcrypt work.
_dummy_hashes: dict[int, str] = {}

MAX_SECRET_BYTES = 72


def _require_secret(value) -> str:
    # Secrets are used verbatim; only blank ones are rejected
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("secret is required")
    return value


def hash_secret(secret: str) -> str:
    """
    Hash a secret using bcrypt.

    Rounds come from BCRYPT_ROUNDS so tests can run with a cheap cost.
    """
    encoded = secret.encode("utf-8")
    if len(encoded) > MAX_SECRET_BYTES:
        raise ValidationError(f"secret must be at most {MAX_SECRET_BYTES} bytes")
    rounds = int(current_app.config.get("BCRYPT_ROUNDS", 12))
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(encoded, salt)
    return hashed.decode("utf-8")  # Store as string in database


def _dummy_hash() -> str:
    rounds = int(current_app.config.get("BCRYPT_ROUNDS", 12))
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = hash_secret("cashbook-no-such-account")
    return _dummy_hashes[rounds]


def verify_secret(secret: str, secret_hash: str) -> bool:
    """
    Verify secret against bcrypt hash.

    bcrypt.checkpw() compares in constant time. A malformed stored hash
    or a secret over MAX_SECRET_BYTES counts as a mismatch.
    """
    encoded = secret.encode("utf-8")
    if len(encoded) > MAX_SECRET_BYTES:
        # No stored hash was made from a secret this long
        return False
    try:
        return bcrypt.checkpw(encoded, secret_hash.encode("utf-8"))
    except ValueError:
        return False


def authenticate(role: Role, email: str, secret: str) -> Account:
    """
    Return the Account matching (role, email, secret).

    Raises InvalidCredentials on any mismatch, ValidationError when the
    request is missing a field, StoreError if the lookup itself fails.
    """
    email = require_text("email", email).lower()
    secret = _require_secret(secret)

    try:
        account = db.session.query(Account).filter_by(role=role.value, email=email).first()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StoreError() from exc

    if account is None:
        verify_secret(secret, _dummy_hash())
        logger.info("Login failed for %s %s", role.value, email)
        raise InvalidCredentials()

    if not verify_secret(secret, account.secret_hash):
        logger.info("Login failed for %s %s", role.value, email)
        raise InvalidCredentials()

    return account


def create_account(role: Role, name: str, email: str, secret: str) -> Account:
    """
    Validate, hash and insert a new account in one store operation.

    Validation runs before any store call. Uniqueness of (role, email) is
    left to the database constraint; callers map IntegrityError.
    """
    name = require_text("name", name)
    email = normalize_email(email)
    secret = _require_secret(secret)

    account = Account(
        role=role.value,
        name=name,
        email=email,
        secret_hash=hash_secret(secret),
    )
    db.session.add(account)
    db.session.commit()
    return account
