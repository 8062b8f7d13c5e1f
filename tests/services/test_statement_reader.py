"""
Tests for the StatementReader.
"""

import threading
from datetime import datetime, timedelta
from itertools import count

import pytest

from account_ledger.errors import AccountNotFound
from account_ledger.models.base import Database
from account_ledger.models.enums import TransactionKind
from account_ledger.services.balance_mutator import BalanceMutator
from account_ledger.services.ledger_store import LedgerStore
from account_ledger.services.statement_reader import STATEMENT_SIZE, StatementReader

T0 = datetime(2024, 2, 1, 9, 30, 0)


def ticking_clock(start=T0, step=timedelta(seconds=1)):
    """A clock that advances by step on every call."""
    ticks = count()
    return lambda: start + step * next(ticks)


def fixed_clock(moment=T0):
    return lambda: moment


class TestGetStatement:

    def test_statement_lists_newest_first(self, database, make_account):
        account_id = make_account(balance_limit=1000)
        mutator = BalanceMutator(database, clock=ticking_clock())
        mutator.apply_transaction(account_id, 100, TransactionKind.CREDIT, "one")
        mutator.apply_transaction(account_id, 200, TransactionKind.CREDIT, "two")
        mutator.apply_transaction(account_id, 50, TransactionKind.DEBIT, "three")

        statement = StatementReader(database).get_statement(account_id)

        assert statement.balance == 250
        assert statement.balance_limit == 1000
        assert [(e.amount, e.kind) for e in statement.recent_transactions] == [
            (50, TransactionKind.DEBIT),
            (200, TransactionKind.CREDIT),
            (100, TransactionKind.CREDIT),
        ]
        assert statement.recent_transactions[0].description == "three"

    def test_same_timestamp_orders_by_insertion(self, database, make_account):
        account_id = make_account(balance_limit=1000)
        mutator = BalanceMutator(database, clock=fixed_clock())
        for description in ("first", "second", "third"):
            mutator.apply_transaction(account_id, 1, TransactionKind.CREDIT, description)

        statement = StatementReader(database).get_statement(account_id)

        assert [e.description for e in statement.recent_transactions] == [
            "third", "second", "first",
        ]

    def test_only_latest_ten_returned(self, database, make_account):
        account_id = make_account(balance_limit=1000)
        mutator = BalanceMutator(database, clock=ticking_clock())
        for n in range(1, 13):
            mutator.apply_transaction(account_id, n, TransactionKind.CREDIT, f"tx{n}")

        statement = StatementReader(database).get_statement(account_id)

        assert STATEMENT_SIZE == 10
        assert [e.amount for e in statement.recent_transactions] == list(range(12, 2, -1))
        assert statement.balance == sum(range(1, 13))

    def test_account_without_transactions(self, database, make_account):
        account_id = make_account(balance_limit=500)

        statement = StatementReader(database).get_statement(account_id)

        assert statement.balance == 0
        assert statement.balance_limit == 500
        assert statement.recent_transactions == []

    def test_missing_account(self, database):
        with pytest.raises(AccountNotFound):
            StatementReader(database).get_statement(999)

    def test_as_of_comes_from_clock(self, database, make_account):
        account_id = make_account(balance_limit=500)
        moment = datetime(2030, 5, 17, 8, 0, 0)

        statement = StatementReader(database, clock=fixed_clock(moment)).get_statement(
            account_id
        )

        assert statement.as_of == moment

    def test_repeated_reads_are_identical(self, database, make_account):
        account_id = make_account(balance_limit=500)
        BalanceMutator(database).apply_transaction(
            account_id, 10, TransactionKind.DEBIT, "coffee"
        )
        reader = StatementReader(database, clock=fixed_clock())

        assert reader.get_statement(account_id) == reader.get_statement(account_id)


class TestReadsAlongsideWrites:

    def test_statement_does_not_wait_for_a_writer(
        self, database, database_url, make_account
    ):
        account_id = make_account(balance_limit=1000)
        impatient = StatementReader(Database(database_url, lock_timeout_ms=100))
        locked = threading.Event()
        release = threading.Event()

        def hold_write_lock():
            with database.unit_of_work() as db:
                store = LedgerStore(db)
                store.lock_account_for_update(account_id)
                store.write_balance(account_id, -300)
                locked.set()
                release.wait(timeout=10)

        holder = threading.Thread(target=hold_write_lock)
        holder.start()
        try:
            assert locked.wait(timeout=10)
            statement = impatient.get_statement(account_id)
        finally:
            release.set()
            holder.join()
            impatient.database.dispose()

        # The uncommitted write is not visible
        assert statement.balance == 0
        assert StatementReader(database).get_statement(account_id).balance == -300
