"""
Initial accounts.

These are the five accounts the service has always started
with. Seeding is idempotent: accounts that already exist are
left as they are.
"""

import logging

from sqlalchemy import text

from account_ledger.models.account import Account
from account_ledger.models.base import Database
from account_ledger.services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)

# (id, name, balance_limit)
DEFAULT_ACCOUNTS: list[tuple[int, str, int]] = [
    (1, "o barato sai caro", 100000),
    (2, "zan corp ltda", 80000),
    (3, "les cruders", 1000000),
    (4, "padaria joia de cocaia", 10000000),
    (5, "kid mais", 500000),
]


def seed_accounts(
    database: Database,
    accounts: list[tuple[int, str, int]] = DEFAULT_ACCOUNTS,
) -> int:
    """Create any missing accounts and return how many were created."""
    created = 0
    with database.unit_of_work() as db:
        store = LedgerStore(db)
        for account_id, name, balance_limit in accounts:
            if db.get(Account, account_id) is not None:
                continue
            store.create_account(name, balance_limit, account_id=account_id)
            created += 1

        if created and database.dialect_name == "postgresql":
            # Explicit ids do not advance the serial sequence
            db.execute(text(
                "SELECT setval(pg_get_serial_sequence('accounts', 'id'), "
                "(SELECT MAX(id) FROM accounts))"
            ))

    logger.info("Seeded %s of %s accounts", created, len(accounts))
    return created
