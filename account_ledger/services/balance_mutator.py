"""
Balance mutator: the only code path that changes a balance.

Each call:
1. Locks the account row and reads its balance and limit
2. Computes the new balance from the kind and amount
3. Rejects a debit that would pass the overdraft limit
4. Writes the new balance and appends the transaction
5. Commits

Steps 1-4 share one unit of work, and the lock from step 1 is
held until it ends. Two debits against the same account can
therefore never both pass step 3 on the same starting balance.
Any failure rolls the whole unit of work back.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from account_ledger.errors import InsufficientFunds, InvalidTransaction
from account_ledger.models.account import MAX_AMOUNT
from account_ledger.models.base import Database, utcnow
from account_ledger.models.enums import TransactionKind
from account_ledger.models.transaction import DESCRIPTION_MAX_LENGTH
from account_ledger.schemas.transaction import BalanceSnapshot
from account_ledger.services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)


def validate_transaction(amount: int, description: str) -> None:
    """
    Reject amounts and descriptions the ledger cannot store.

    The API validates the same rules. They are checked again
    here so that no other caller can bypass them.
    """
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise InvalidTransaction(f"amount must be an integer, got {amount!r}")
    if amount <= 0:
        raise InvalidTransaction(f"amount must be positive, got {amount}")
    if amount > MAX_AMOUNT:
        raise InvalidTransaction(
            f"amount must not exceed {MAX_AMOUNT}, got {amount}"
        )
    if not isinstance(description, str):
        raise InvalidTransaction("description must be a string")
    if not 1 <= len(description) <= DESCRIPTION_MAX_LENGTH:
        raise InvalidTransaction(
            f"description must have between 1 and {DESCRIPTION_MAX_LENGTH} characters"
        )


class BalanceMutator:
    """
    Applies credits and debits to accounts.

    The clock stamps each transaction's created_at. Tests can
    pass a fixed clock to control ordering.
    """

    def __init__(self, database: Database, clock: Callable[[], datetime] = utcnow):
        self.database = database
        self.clock = clock

    def apply_transaction(
        self,
        account_id: int,
        amount: int,
        kind: TransactionKind | str,
        description: str,
    ) -> BalanceSnapshot:
        """
        Credit or debit an account and record the transaction.

        Returns the balance and limit after the change.

        Raises InvalidTransactionType or InvalidTransaction before
        touching the database, AccountNotFound if the account does
        not exist, InsufficientFunds if a debit would pass the
        overdraft limit, InvalidTransaction if a credit would take
        the balance past MAX_AMOUNT, and StoreUnavailable if the database
        failed or the lock wait timed out. In every error case
        nothing is written.
        """
        kind = TransactionKind.parse(kind)
        validate_transaction(amount, description)

        with self.database.unit_of_work() as db:
            store = LedgerStore(db)
            current = store.lock_account_for_update(account_id)

            candidate = kind.apply(current.balance, amount)
            if kind is TransactionKind.DEBIT and candidate < -current.balance_limit:
                logger.warning(
                    "Debit rejected for account %s: balance=%s limit=%s amount=%s",
                    account_id, current.balance, current.balance_limit, amount,
                )
                raise InsufficientFunds(
                    account_id, current.balance, current.balance_limit, amount
                )
            if candidate > MAX_AMOUNT:
                raise InvalidTransaction(
                    f"Credit of {amount} would take account {account_id} "
                    "past the largest storable balance"
                )

            snapshot = store.write_balance(account_id, candidate)
            store.append_transaction(
                account_id, amount, kind, description, self.clock()
            )

        logger.info(
            "Applied %s of %s to account %s, balance now %s",
            kind.name.lower(), amount, account_id, snapshot.balance,
        )
        return snapshot
