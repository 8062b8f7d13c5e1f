"""
Pydantic schemas for transaction operations.

BalanceSnapshot is what the engine returns. The request and
response models define the HTTP contract, which keeps the
field names clients of the original service already send.
"""

from pydantic import BaseModel, Field

from account_ledger.models.account import MAX_AMOUNT
from account_ledger.models.transaction import DESCRIPTION_MAX_LENGTH


class BalanceSnapshot(BaseModel):
    """Balance and overdraft limit of one account at one instant."""
    balance: int
    balance_limit: int

    model_config = {"from_attributes": True, "frozen": True}


# --- HTTP Schemas ---

class TransactionRequest(BaseModel):
    """
    Body of POST /clientes/{id}/transacoes.

    tipo is left as a plain string so that an unknown kind
    reaches the engine and is reported as such.
    """
    valor: int = Field(gt=0, le=MAX_AMOUNT, strict=True)
    tipo: str
    descricao: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)


class TransactionResponse(BaseModel):
    limite: int
    saldo: int

    @classmethod
    def from_snapshot(cls, snapshot: BalanceSnapshot) -> "TransactionResponse":
        return cls(limite=snapshot.balance_limit, saldo=snapshot.balance)
