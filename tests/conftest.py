"""
Shared test fixtures.

Each test gets its own SQLite file under tmp_path, so tests
never touch a real database and several threads can share
one database within a test.
"""

import pytest
from fastapi.testclient import TestClient

from account_ledger.main import create_app
from account_ledger.models.base import Database
from account_ledger.seed import seed_accounts
from account_ledger.services.ledger_store import LedgerStore


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'ledger.db'}"


@pytest.fixture
def database(database_url):
    """Create all tables before the test, drop them after."""
    db = Database(database_url, lock_timeout_ms=5000)
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def seeded_database(database):
    """The database with the five default accounts."""
    seed_accounts(database)
    return database


@pytest.fixture
def make_account(database):
    """Create an account and return its id."""
    def _make_account(balance_limit, balance=0, name="test"):
        with database.unit_of_work() as db:
            account = LedgerStore(db).create_account(
                name, balance_limit, balance=balance
            )
            return account.id
    return _make_account


@pytest.fixture
def client(seeded_database):
    """A test client for an app bound to the seeded test database."""
    app = create_app(database=seeded_database)
    return TestClient(app)
