"""
Ledger store: all reads and writes of accounts and transactions.

The store takes a session that is already inside a unit of
work. The caller owns the transaction boundary: nothing done
here is visible to anyone else until that unit of work
commits, and all of it is discarded if it rolls back.
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from account_ledger.errors import AccountNotFound
from account_ledger.models.account import Account
from account_ledger.models.enums import TransactionKind
from account_ledger.models.transaction import Transaction
from account_ledger.schemas.transaction import BalanceSnapshot


class LedgerStore:

    def __init__(self, db: Session):
        self.db = db

    def create_account(
        self,
        name: str,
        balance_limit: int,
        balance: int = 0,
        account_id: int | None = None,
    ) -> Account:
        """
        Create an account.

        Raises ValueError for a negative limit or an opening
        balance already below the limit.
        """
        if balance_limit < 0:
            raise ValueError("balance_limit must not be negative")
        if balance < -balance_limit:
            raise ValueError(
                f"Opening balance {balance} is below the limit of -{balance_limit}"
            )

        account = Account(
            id=account_id,
            name=name,
            balance=balance,
            balance_limit=balance_limit,
        )
        self.db.add(account)
        self.db.flush()
        return account

    def lock_account_for_update(self, account_id: int) -> BalanceSnapshot:
        """
        Read an account's balance and take an exclusive lock on it.

        Any other unit of work locking the same account waits here
        until this one commits or rolls back, and then reads the
        balance this one left behind.
        """
        row = self.db.execute(
            select(Account.balance, Account.balance_limit)
            .where(Account.id == account_id)
            .with_for_update()
        ).one_or_none()

        if row is None:
            raise AccountNotFound(account_id)
        return BalanceSnapshot(balance=row.balance, balance_limit=row.balance_limit)

    def write_balance(self, account_id: int, new_balance: int) -> BalanceSnapshot:
        """Overwrite the balance of an account locked by this unit of work."""
        row = self.db.execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=new_balance)
            .returning(Account.balance, Account.balance_limit)
            .execution_options(synchronize_session=False)
        ).one_or_none()

        if row is None:
            raise AccountNotFound(account_id)
        return BalanceSnapshot(balance=row.balance, balance_limit=row.balance_limit)

    def append_transaction(
        self,
        account_id: int,
        amount: int,
        kind: TransactionKind,
        description: str,
        created_at: datetime,
    ) -> Transaction:
        """Insert an immutable transaction row."""
        transaction = Transaction(
            account_id=account_id,
            amount=amount,
            kind=kind,
            description=description,
            created_at=created_at,
        )
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def recent_transactions(self, account_id: int, limit: int) -> list[Transaction]:
        """
        Return up to limit transactions, newest first.

        Transactions with the same timestamp are ordered by
        insertion, the most recently inserted first. An account
        with no transactions gives an empty list; a missing
        account raises AccountNotFound.
        """
        exists = self.db.execute(
            select(Account.id).where(Account.id == account_id)
        ).scalar_one_or_none()
        if exists is None:
            raise AccountNotFound(account_id)

        transactions = self.db.execute(
            select(Transaction)
            .where(Transaction.account_id == account_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
        ).scalars().all()
        return list(transactions)

    def read_statement(
        self, account_id: int, limit: int
    ) -> tuple[BalanceSnapshot, list[Transaction]]:
        """
        Read balance, limit and recent transactions in one statement.

        A single query means both halves come from the same
        snapshot, even at isolation levels where two separate
        queries could straddle a concurrent commit.
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")

        rows = self.db.execute(
            select(Account.balance, Account.balance_limit, Transaction)
            .select_from(Account)
            .outerjoin(Transaction, Transaction.account_id == Account.id)
            .where(Account.id == account_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
        ).all()

        if not rows:
            raise AccountNotFound(account_id)

        snapshot = BalanceSnapshot(
            balance=rows[0].balance, balance_limit=rows[0].balance_limit
        )
        # With no transactions the outer join yields one row with no Transaction
        transactions = [row.Transaction for row in rows if row.Transaction is not None]
        return snapshot, transactions
