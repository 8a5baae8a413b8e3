"""SQLAlchemy-backed repository for reporting rows."""

from datetime import datetime

from sqlalchemy import select

from household_ledger.application.ports.database import DatabaseEnginePort
from household_ledger.application.ports.statistics_repository import (
    StatisticsRepositoryPort,
)
from household_ledger.domain.currency import Currency
from household_ledger.domain.models import (
    Account,
    ExpenseStatRow,
    ExpenseType,
    IncomeStatRow,
)
from household_ledger.infrastructure.ledger_repository import account_from_row
from household_ledger.infrastructure.schema import (
    accounts,
    categories,
    expenses,
    incomes,
    user_accounts,
)
from household_ledger.utils.decimal_utils import coerce_decimal


class SqlAlchemyStatisticsRepository(StatisticsRepositoryPort):
    """Read-only repository backed by SQLAlchemy for ledger statistics."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_realized_expenses(
        self,
        user_id: str,
        start: datetime | None,
        end: datetime | None,
    ) -> list[ExpenseStatRow]:
        query = (
            select(
                expenses.c.amount,
                expenses.c.currency,
                expenses.c.payment_method,
                expenses.c.created_at,
                categories.c.name.label("category_name"),
            )
            .join(categories, categories.c.id == expenses.c.category_id)
            .where(
                expenses.c.user_id == user_id,
                expenses.c.expense_type == ExpenseType.REALIZED.value,
            )
            .order_by(expenses.c.created_at)
        )
        if start is not None:
            query = query.where(expenses.c.created_at >= start)
        if end is not None:
            query = query.where(expenses.c.created_at <= end)
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            ExpenseStatRow(
                amount=coerce_decimal(row.amount),
                currency=Currency(row.currency),
                payment_method=row.payment_method,
                category_name=row.category_name,
                created_at=row.created_at,
            )
            for row in rows
        ]

    def fetch_incomes(
        self,
        user_id: str,
        start: datetime | None,
        end: datetime | None,
    ) -> list[IncomeStatRow]:
        query = (
            select(incomes.c.amount, incomes.c.currency, incomes.c.created_at)
            .where(incomes.c.user_id == user_id)
            .order_by(incomes.c.created_at)
        )
        if start is not None:
            query = query.where(incomes.c.created_at >= start)
        if end is not None:
            query = query.where(incomes.c.created_at <= end)
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            IncomeStatRow(
                amount=coerce_decimal(row.amount),
                currency=Currency(row.currency),
                created_at=row.created_at,
            )
            for row in rows
        ]

    def fetch_member_accounts(self, user_id: str) -> list[Account]:
        query = (
            select(accounts)
            .join(user_accounts, user_accounts.c.account_id == accounts.c.id)
            .where(user_accounts.c.user_id == user_id)
            .order_by(accounts.c.created_at, accounts.c.id)
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [account_from_row(row) for row in rows]


__all__ = ["SqlAlchemyStatisticsRepository"]
