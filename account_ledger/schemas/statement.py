"""
Pydantic schemas for account statements.
"""

from datetime import datetime, timezone

from pydantic import BaseModel

from account_ledger.models.enums import TransactionKind


class StatementEntry(BaseModel):
    """One transaction as it appears on a statement."""
    amount: int
    kind: TransactionKind
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}


class Statement(BaseModel):
    """
    Balance, limit and most recent transactions read together.

    as_of records when the snapshot was taken. It is for display
    and plays no part in what was read.
    """
    balance: int
    balance_limit: int
    as_of: datetime
    recent_transactions: list[StatementEntry]


# --- HTTP Schemas ---

def _rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class StatementBalance(BaseModel):
    total: int
    data_extrato: str
    limite: int


class StatementTransaction(BaseModel):
    valor: int
    tipo: str
    descricao: str
    realizada_em: str


class StatementResponse(BaseModel):
    saldo: StatementBalance
    ultimas_transacoes: list[StatementTransaction]

    @classmethod
    def from_statement(cls, statement: Statement) -> "StatementResponse":
        return cls(
            saldo=StatementBalance(
                total=statement.balance,
                data_extrato=_rfc3339(statement.as_of),
                limite=statement.balance_limit,
            ),
            ultimas_transacoes=[
                StatementTransaction(
                    valor=entry.amount,
                    tipo=entry.kind.value,
                    descricao=entry.description,
                    realizada_em=_rfc3339(entry.created_at),
                )
                for entry in statement.recent_transactions
            ],
        )
