"""
Statement reader: balance, limit and recent activity.

Reads take no exclusive lock. A statement taken while a
transaction is being applied shows the account either before
or after it, never in between, because writes are atomic and
the statement is read with a single query.
"""

from collections.abc import Callable
from datetime import datetime

from account_ledger.models.base import Database, utcnow
from account_ledger.schemas.statement import Statement, StatementEntry
from account_ledger.services.ledger_store import LedgerStore

# Number of transactions shown on a statement
STATEMENT_SIZE = 10


class StatementReader:

    def __init__(self, database: Database, clock: Callable[[], datetime] = utcnow):
        self.database = database
        self.clock = clock

    def get_statement(self, account_id: int) -> Statement:
        """
        Return the current balance and the latest transactions.

        Raises AccountNotFound if the account does not exist.
        """
        with self.database.unit_of_work(write=False) as db:
            snapshot, transactions = LedgerStore(db).read_statement(
                account_id, STATEMENT_SIZE
            )
            entries = [StatementEntry.model_validate(t) for t in transactions]
            as_of = self.clock()

        return Statement(
            balance=snapshot.balance,
            balance_limit=snapshot.balance_limit,
            as_of=as_of,
            recent_transactions=entries,
        )
