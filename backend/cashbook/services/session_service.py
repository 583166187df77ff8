# Overview: Service-layer operations for session tokens; issue and verify.

"""
Stateless Session Tokens

Tokens are signed with SECRET_KEY (itsdangerous URL-safe serializer) and
carry everything the access guard needs: subject id, role, issue and expiry
times. Nothing is stored server-side, so a token cannot be revoked before
it expires; logout is a client-side discard.

Claims:
- sub: Account.id
- role: "admin" | "cashier"
- iat: issued-at, epoch seconds
- exp: expiry, epoch seconds (iat + role TTL)

TTL per role comes from config:
- ADMIN_TOKEN_TTL_SECONDS   (default 1 hour)
- CASHIER_TOKEN_TTL_SECONDS (default 1 day)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from flask import current_app
from itsdangerous import BadSignature, URLSafeSerializer

from ..errors import ExpiredToken, InvalidToken
from ..models import Account, Role
from ..time_utils import from_epoch_seconds, to_epoch_seconds, utcnow

TOKEN_SALT = "cashbook.session"


@dataclass(frozen=True)
class Identity:
    """Decoded, verified token subject. Built only from a verified token."""
    subject_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> dict:
        return {"id": self.subject_id, "role": self.role.value}


@dataclass(frozen=True)
class IssuedToken:
    token: str
    identity: Identity
    issued_at: datetime
    expires_at: datetime


def _serializer() -> URLSafeSerializer:
    return URLSafeSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def token_ttl(role: Role) -> timedelta:
    if role is Role.ADMIN:
        seconds = current_app.config["ADMIN_TOKEN_TTL_SECONDS"]
    else:
        seconds = current_app.config["CASHIER_TOKEN_TTL_SECONDS"]
    return timedelta(seconds=int(seconds))


def issue_token(account: Account, now: datetime | None = None) -> IssuedToken:
    """Sign a token for a freshly authenticated account."""
    role = account.role_enum
    issued_at = (now or utcnow()).replace(microsecond=0)
    expires_at = issued_at + token_ttl(role)

    payload = {
        "sub": account.id,
        "role": role.value,
        "iat": to_epoch_seconds(issued_at),
        "exp": to_epoch_seconds(expires_at),
    }
    token = _serializer().dumps(payload)
    return IssuedToken(
        token=token,
        identity=Identity(subject_id=account.id, role=role),
        issued_at=issued_at,
        expires_at=expires_at,
    )


def verify_token(token: str, now: datetime | None = None) -> Identity:
    """
    Verify signature and expiry, return the Identity.

    Raises:
        InvalidToken: bad signature, foreign key, or malformed claims
        ExpiredToken: now is at or past the exp claim
    """
    try:
        payload = _serializer().loads(token)
    except BadSignature:
        raise InvalidToken()

    if not isinstance(payload, dict):
        raise InvalidToken()

    subject_id = payload.get("sub")
    role = Role.parse(payload.get("role")) if isinstance(payload.get("role"), str) else None
    exp = payload.get("exp")

    if (
        not isinstance(subject_id, int) or isinstance(subject_id, bool)
        or role is None
        or not isinstance(exp, int) or isinstance(exp, bool)
    ):
        raise InvalidToken()

    current = now or utcnow()
    if current >= from_epoch_seconds(exp):
        raise ExpiredToken()

    return Identity(subject_id=subject_id, role=role)
