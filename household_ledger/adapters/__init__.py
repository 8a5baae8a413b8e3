"""Command-line adapters of the household ledger."""
