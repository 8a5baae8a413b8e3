"""Port for reading the rows aggregated by the statistics use case."""

from datetime import datetime
from typing import Protocol

from household_ledger.domain.models import (
    Account,
    ExpenseStatRow,
    IncomeStatRow,
)


class StatisticsRepositoryPort(Protocol):
    """Port exposing read-only access to reporting rows."""

    def fetch_realized_expenses(
        self,
        user_id: str,
        start: datetime | None,
        end: datetime | None,
    ) -> list[ExpenseStatRow]:
        """Return realized expenses recorded by the user in the window."""

    def fetch_incomes(
        self,
        user_id: str,
        start: datetime | None,
        end: datetime | None,
    ) -> list[IncomeStatRow]:
        """Return incomes recorded by the user in the window."""

    def fetch_member_accounts(self, user_id: str) -> list[Account]:
        """Return the accounts the user belongs to."""


__all__ = ["StatisticsRepositoryPort"]
