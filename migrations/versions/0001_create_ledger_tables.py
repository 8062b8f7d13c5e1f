"""create ledger tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

transaction_kind_enum = sa.Enum(
    "CREDIT", "DEBIT", name="transaction_kind_enum", create_constraint=True
)


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("balance", sa.BigInteger(), nullable=False),
        sa.Column("balance_limit", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "balance_limit >= 0", name="ck_accounts_limit_non_negative"
        ),
        sa.CheckConstraint(
            "balance >= -balance_limit", name="ck_accounts_within_limit"
        ),
    )
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "account_id",
            sa.Integer(),
            sa.ForeignKey("accounts.id"),
            nullable=False,
        ),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("kind", transaction_kind_enum, nullable=False),
        sa.Column("description", sa.String(10), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        sa.CheckConstraint(
            "length(description) BETWEEN 1 AND 10",
            name="ck_transactions_description_length",
        ),
    )
    op.create_index(
        "ix_transactions_account_recent",
        "transactions",
        ["account_id", "created_at", "id"],
    )


def downgrade() -> None:
    op.drop_index("ix_transactions_account_recent", table_name="transactions")
    op.drop_table("transactions")
    op.drop_table("accounts")
    transaction_kind_enum.drop(op.get_bind(), checkfirst=True)
