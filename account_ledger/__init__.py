"""Account ledger: balances with overdraft limits and their transaction history."""
