"""Ledger engine services."""

from account_ledger.services.ledger_store import LedgerStore
from account_ledger.services.balance_mutator import BalanceMutator
from account_ledger.services.statement_reader import StatementReader, STATEMENT_SIZE

__all__ = ["LedgerStore", "BalanceMutator", "StatementReader", "STATEMENT_SIZE"]
