"""initial ledger schema

Revision ID: c4b1e7a20d11
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the two tables of the cashier ledger:
- accounts: admin and cashier logins, email unique per role
- transactions: append-only ledger entries; owner_id is intentionally
  not a foreign key so entries survive cashier deletion
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c4b1e7a20d11'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # ============================================================================
    # accounts: role-scoped credentials
    # ============================================================================
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('secret_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('role', 'email', name='uq_accounts_role_email'),
        sa.CheckConstraint("role IN ('admin', 'cashier')", name='ck_accounts_role'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_accounts_role_created', 'accounts', ['role', 'created_at'])

    # ============================================================================
    # transactions: append-only ledger
    # ============================================================================
    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('owner_name', sa.String(length=120), nullable=False),
        sa.Column('amount_cents', sa.BigInteger(), nullable=False),
        sa.Column('kind', sa.String(length=16), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount_cents > 0', name='ck_transactions_amount_positive'),
        sa.CheckConstraint(
            "kind IN ('sale', 'refund', 'void', 'income', 'expense')",
            name='ck_transactions_kind'
        ),
        sqlite_autoincrement=True
    )
    op.create_index('ix_transactions_owner_id', 'transactions', ['owner_id'])
    op.create_index('ix_transactions_created_at', 'transactions', ['created_at'])
    op.create_index('ix_transactions_owner_created', 'transactions', ['owner_id', 'created_at'])


def downgrade():
    op.drop_index('ix_transactions_owner_created', table_name='transactions')
    op.drop_index('ix_transactions_created_at', table_name='transactions')
    op.drop_index('ix_transactions_owner_id', table_name='transactions')
    op.drop_table('transactions')
    op.drop_index('ix_accounts_role_created', table_name='accounts')
    op.drop_table('accounts')
