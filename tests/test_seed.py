"""
Tests for seeding the default accounts.
"""

from account_ledger.seed import DEFAULT_ACCOUNTS, seed_accounts
from tests.helpers import stored_balance


def test_seed_creates_default_accounts(database):
    assert seed_accounts(database) == 5

    for account_id, _, balance_limit in DEFAULT_ACCOUNTS:
        assert stored_balance(database, account_id) == (0, balance_limit)


def test_seed_is_idempotent(database):
    seed_accounts(database)
    assert seed_accounts(database) == 0


def test_accounts_created_after_seeding_get_new_ids(database):
    from account_ledger.services.ledger_store import LedgerStore

    seed_accounts(database)
    with database.unit_of_work() as db:
        account = LedgerStore(db).create_account("newcomer", 100)

    assert account.id == 6


def test_seed_keeps_existing_balances(database):
    from account_ledger.services.balance_mutator import BalanceMutator

    seed_accounts(database)
    BalanceMutator(database).apply_transaction(1, 100, "c", "keep")
    seed_accounts(database)

    assert stored_balance(database, 1) == (100, 100000)
