# backend/cashbook/config.py
from __future__ import annotations
import os


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Config:
    # Optional "SECRET_KEY", with default dev key. Signs session tokens.
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/cashbook.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///cashbook.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session token lifetime per role
    ADMIN_TOKEN_TTL_SECONDS = _int_env("ADMIN_TOKEN_TTL_SECONDS", 60 * 60)
    CASHIER_TOKEN_TTL_SECONDS = _int_env("CASHIER_TOKEN_TTL_SECONDS", 24 * 60 * 60)

    BCRYPT_ROUNDS = _int_env("BCRYPT_ROUNDS", 12)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000",
        ).split(",")
        if origin.strip()
    ]
