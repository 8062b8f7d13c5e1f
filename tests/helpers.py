"""Small readers used by several test modules."""

from sqlalchemy import func, select

from account_ledger.models.account import Account
from account_ledger.models.transaction import Transaction


def stored_balance(database, account_id):
    with database.unit_of_work() as db:
        account = db.get(Account, account_id)
        return account.balance, account.balance_limit


def transaction_count(database, account_id):
    with database.unit_of_work() as db:
        return db.execute(
            select(func.count(Transaction.id)).where(
                Transaction.account_id == account_id
            )
        ).scalar_one()
