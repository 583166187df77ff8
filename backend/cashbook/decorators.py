# Overview: Access guard; request decorators for token and role checks.

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import request, jsonify, g

from .errors import CashbookError, Forbidden, MissingToken
from .models import Role
from .services import session_service
from .services.session_service import Identity


def authorize(authorization_header: Optional[str], required_role: Optional[Role] = None) -> Identity:
    """
    Turn an Authorization header into a verified Identity.

    Pure: reads only the header and config, never the account table. The
    role claim in a validly signed token is trusted as-is until expiry.

    Raises:
        MissingToken: header absent, blank, or not "Bearer <token>"
        InvalidToken / ExpiredToken: from session_service.verify_token
        Forbidden: required_role given and the token's role differs
    """
    if not authorization_header:
        raise MissingToken()

    scheme, _, token = authorization_header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise MissingToken()

    identity = session_service.verify_token(token)

    if required_role is not None and identity.role is not required_role:
        raise Forbidden(f"Access forbidden. Requires {required_role.value} role.")

    return identity


def _error_response(exc: CashbookError):
    return jsonify({"message": exc.message}), exc.status_code


def require_auth(f):
    """
    Require a valid session token.

    Sets g.identity (subject_id + role) for the route.
    Returns 401 for a missing, malformed, tampered or expired token.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            g.identity = authorize(request.headers.get("Authorization"))
        except CashbookError as e:
            return _error_response(e)
        return f(*args, **kwargs)

    return decorated_function


def require_role(role: Role):
    """
    Require a valid token whose role is `role`.

    401 on token problems, 403 on role mismatch. The role check runs before
    the body is read, so a cashier gets 403 whatever the payload.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                g.identity = authorize(request.headers.get("Authorization"), required_role=role)
            except CashbookError as e:
                return _error_response(e)
            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_admin(f):
    return require_role(Role.ADMIN)(f)


def ensure_owner_or_admin(owner_id: int) -> None:
    """
    For per-owner resources: admins see everyone, cashiers only themselves.

    Must run after require_auth. Raises Forbidden.
    """
    identity: Identity = g.identity
    if identity.is_admin:
        return
    if identity.subject_id != owner_id:
        raise Forbidden("Access forbidden. Cashiers may only access their own transactions.")
