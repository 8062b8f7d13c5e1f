"""
Account model.

An account holds a balance that may go negative, but never
below -balance_limit. The limit is fixed when the account is
created. The balance is the only field that ever changes.
"""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_ledger.models.base import Base, utcnow

# Largest value a BigInteger column holds
MAX_AMOUNT = 2**63 - 1


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance_limit >= 0", name="ck_accounts_limit_non_negative"),
        CheckConstraint("balance >= -balance_limit", name="ck_accounts_within_limit"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    balance_limit: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="account"
    )

    def __repr__(self) -> str:
        return f"<Account {self.id} balance={self.balance} limit={self.balance_limit}>"
