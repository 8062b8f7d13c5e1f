"""
Transaction model.

Transactions are append-only: once inserted they are never
modified or deleted. Each one is written in the same database
transaction as the balance change it records.
"""

from datetime import datetime

from sqlalchemy import (
    BigInteger, CheckConstraint, DateTime, ForeignKey, Index, String,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_ledger.models.base import Base, utcnow
from account_ledger.models.enums import TransactionKind

DESCRIPTION_MAX_LENGTH = 10


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        CheckConstraint(
            f"length(description) BETWEEN 1 AND {DESCRIPTION_MAX_LENGTH}",
            name="ck_transactions_description_length",
        ),
        # Serves "most recent N for one account" without a sort
        Index("ix_transactions_account_recent", "account_id", "created_at", "id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    kind: Mapped[TransactionKind] = mapped_column(
        SAEnum(
            TransactionKind,
            name="transaction_kind_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    account: Mapped["Account"] = relationship(back_populates="transactions")

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.kind.name} {self.amount} "
            f"account={self.account_id}>"
        )
