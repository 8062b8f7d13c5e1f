"""
Errors raised by the ledger engine.

The engine only reports what went wrong. Mapping an error to
a transport response is the job of the API layer.
"""


class LedgerError(Exception):
    """Base class for every error the ledger engine raises."""

    retryable: bool = False


class AccountNotFound(LedgerError):
    """The referenced account does not exist."""

    def __init__(self, account_id: int):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class InsufficientFunds(LedgerError):
    """A debit would take the balance below the overdraft limit."""

    def __init__(self, account_id: int, balance: int, balance_limit: int, amount: int):
        super().__init__(
            f"Account {account_id} does not have available limit for this debit: "
            f"balance={balance}, limit={balance_limit}, requested={amount}"
        )
        self.account_id = account_id
        self.balance = balance
        self.balance_limit = balance_limit
        self.amount = amount


class InvalidTransactionType(LedgerError, ValueError):
    """The transaction kind is not a credit or a debit."""

    def __init__(self, kind):
        super().__init__(f"Unknown transaction type: {kind!r}")
        self.kind = kind


class InvalidTransaction(LedgerError, ValueError):
    """The amount or description is outside the accepted range."""


class StoreUnavailable(LedgerError):
    """
    The database could not complete the unit of work.

    Raised after the unit of work has been rolled back, so the
    caller may safely retry.
    """

    retryable = True
