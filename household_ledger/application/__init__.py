"""Application layer of the household ledger."""
