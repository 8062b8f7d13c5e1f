"""
Client account endpoints.

The API layer is thin: it validates request bodies, calls the
engine, and turns engine errors into status codes. All ledger
rules live in the services.
"""

from fastapi import APIRouter, Depends

from account_ledger.models.base import Database, get_database
from account_ledger.schemas.statement import StatementResponse
from account_ledger.schemas.transaction import (
    TransactionRequest,
    TransactionResponse,
)
from account_ledger.services.balance_mutator import BalanceMutator
from account_ledger.services.statement_reader import StatementReader

router = APIRouter(prefix="/clientes", tags=["Clients"])


@router.post("/{account_id}/transacoes", response_model=TransactionResponse)
def create_transaction(
    account_id: int,
    request: TransactionRequest,
    database: Database = Depends(get_database),
):
    """
    Credit or debit an account.

    Returns the balance and limit after the transaction.
    """
    snapshot = BalanceMutator(database).apply_transaction(
        account_id, request.valor, request.tipo, request.descricao
    )
    return TransactionResponse.from_snapshot(snapshot)


@router.get("/{account_id}/extrato", response_model=StatementResponse)
def get_statement(
    account_id: int,
    database: Database = Depends(get_database),
):
    """Balance, limit and the ten most recent transactions."""
    statement = StatementReader(database).get_statement(account_id)
    return StatementResponse.from_statement(statement)
