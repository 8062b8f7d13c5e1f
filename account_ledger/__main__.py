from account_ledger.main import run

run()
