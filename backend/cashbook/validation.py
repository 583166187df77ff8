from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import ValidationError


# Maximum amount: 9,999,999,999.99 (999,999,999,999 cents)
# This keeps cent totals well inside a 64-bit integer column
MAX_AMOUNT_CENTS = 999_999_999_999
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / 100
CENT = Decimal("0.01")

# local@domain.tld, no whitespace, one "@", dotted domain with a 2+ letter TLD
EMAIL_RE = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*"
    r"\.[A-Za-z]{2,}$"
)


def require_text(field: str, value: Any) -> str:
    """Return the stripped string value or raise if missing/blank."""
    if value is None or not isinstance(value, str):
        raise ValidationError(f"{field} is required")
    stripped = value.strip()
    if not stripped:
        raise ValidationError(f"{field} is required")
    return stripped


def optional_text(field: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip()


def normalize_email(value: Any) -> str:
    email = require_text("email", value).lower()
    if len(email) > 255 or not EMAIL_RE.match(email):
        raise ValidationError("email must be a valid email address")
    return email


def parse_positive_id(field: str, value: Any) -> int:
    """
    Accept a positive integer or a plain ASCII digit string.

    Booleans, floats, superscripts, full-width digits and anything else
    are rejected.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a positive integer")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        result = int(value.strip())
    else:
        raise ValidationError(f"{field} must be a positive integer")
    if result <= 0:
        raise ValidationError(f"{field} must be a positive integer")
    return result


def parse_amount_cents(value: Any) -> int:
    """
    Convert a JSON amount (number or numeric string) to integer cents.

    Rules:
    - must be finite and strictly positive
    - at most two decimal places (0.01 is the smallest amount)
    - booleans are not numbers here, even though bool subclasses int
    """
    if value is None or isinstance(value, bool):
        raise ValidationError("amount must be a positive number")

    if isinstance(value, (int, float)):
        # str() of a float gives its shortest round-tripping repr (0.1 -> "0.1")
        raw = str(value)
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValidationError("amount must be a positive number")
    else:
        raise ValidationError("amount must be a positive number")

    try:
        amount = Decimal(raw)
    except InvalidOperation:
        raise ValidationError("amount must be a positive number")

    if not amount.is_finite():
        raise ValidationError("amount must be a positive number")
    if amount <= 0:
        raise ValidationError("amount must be greater than zero")

    # Bound the magnitude before any arithmetic so exponent forms like
    # "1e999999999" or "1e-999999999" never overflow or underflow
    if amount > MAX_AMOUNT:
        raise ValidationError("amount exceeds maximum allowed value")
    quantized = amount.quantize(CENT)
    if quantized != amount:
        raise ValidationError("amount must have at most two decimal places")

    return int(quantized * 100)


def cents_to_decimal(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def cents_to_number(cents: int) -> float:
    """JSON-friendly amount (e.g. 1999 -> 19.99)."""
    return float(cents_to_decimal(cents))
