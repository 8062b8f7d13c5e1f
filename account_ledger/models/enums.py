"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum

from account_ledger.errors import InvalidTransactionType


class TransactionKind(str, enum.Enum):
    """
    Direction of a transaction.

    The stored amount is always a positive magnitude. The kind
    alone decides whether it is added to or taken from the
    balance. The values are the one-letter codes clients send.
    """
    CREDIT = "c"
    DEBIT = "d"

    @classmethod
    def parse(cls, value) -> "TransactionKind":
        """Accept a TransactionKind or its client code."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidTransactionType(value) from None

    def apply(self, balance: int, amount: int) -> int:
        """Balance after moving amount in this direction."""
        if self is TransactionKind.CREDIT:
            return balance + amount
        return balance - amount
