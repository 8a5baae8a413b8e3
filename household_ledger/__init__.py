"""Household ledger: multi-currency shared finances with proportional cost-sharing."""
