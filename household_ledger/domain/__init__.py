"""Domain layer of the household ledger."""
