# Overview: Error taxonomy shared by services, the access guard and routes.

"""
Every error carries the HTTP status it maps to and a human-readable message.

Validation and authorization errors are raised before any store mutation.
StoreError wraps backing-store failures; its message is never shown to the
caller (routes answer a generic 500 and log the original).
"""

from __future__ import annotations


class CashbookError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidCredentials(CashbookError):
    # Same message for unknown email and wrong secret
    status_code = 400
    default_message = "Invalid email or password"


class MissingToken(CashbookError):
    status_code = 401
    default_message = "Access denied. No token provided."


class InvalidToken(CashbookError):
    status_code = 401
    default_message = "Invalid token."


class ExpiredToken(CashbookError):
    status_code = 401
    default_message = "Token has expired."


class Forbidden(CashbookError):
    status_code = 403
    default_message = "Access forbidden."


class ValidationError(CashbookError, ValueError):
    """400-level input problem."""
    status_code = 400
    default_message = "Invalid request"


class DuplicateEmail(CashbookError):
    """409-level uniqueness conflict on (role, email)."""
    status_code = 409
    default_message = "A cashier with this email already exists"


class NotFoundError(CashbookError):
    status_code = 404
    default_message = "Not found"


class StoreError(CashbookError):
    """Opaque backing-store failure."""
    status_code = 500
    default_message = "Internal server error"
