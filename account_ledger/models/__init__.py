"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from account_ledger.models.base import Base, Database, get_database, utcnow
from account_ledger.models.enums import TransactionKind
from account_ledger.models.account import Account
from account_ledger.models.transaction import Transaction

__all__ = [
    "Base",
    "Database",
    "get_database",
    "utcnow",
    "TransactionKind",
    "Account",
    "Transaction",
]
