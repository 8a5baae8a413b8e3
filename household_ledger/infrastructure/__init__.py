"""Infrastructure adapters for the household ledger."""
