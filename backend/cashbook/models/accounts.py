from __future__ import annotations

import enum

from ..extensions import db
from ..time_utils import utcnow, to_utc_z


class Role(str, enum.Enum):
    """The two account roles. Compared only by the access guard."""
    ADMIN = "admin"
    CASHIER = "cashier"

    @classmethod
    def parse(cls, value: str | None) -> "Role | None":
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Account(db.Model):
    """
    Role-scoped login account (admin or cashier).

    Email is unique within a role, so the same address may hold one admin
    and one cashier account. The constraint is the only duplicate check:
    cashier creation is a single INSERT whose IntegrityError means
    "email taken".

    Accounts are never edited. Cashiers are deleted by admins; their
    transactions stay behind (Transaction.owner_id is not a foreign key).
    """
    __tablename__ = "accounts"
    __table_args__ = (
        db.UniqueConstraint("role", "email", name="uq_accounts_role_email"),
        db.CheckConstraint("role IN ('admin', 'cashier')", name="ck_accounts_role"),
        db.Index("ix_accounts_role_created", "role", "created_at"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    role = db.Column(db.String(16), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False)

    # Bcrypt hashed secret
    secret_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def role_enum(self) -> Role:
        return Role(self.role)

    def to_dict(self) -> dict:
        # secret_hash never leaves the service
        return {
            "id": self.id,
            "role": self.role,
            "name": self.name,
            "email": self.email,
            "createdAt": to_utc_z(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.role}:{self.email}>"
