"""Domain services for ledger reporting aggregates."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from household_ledger.domain.currency import (
    Currency,
    CurrencyFamily,
    currency_family,
)
from household_ledger.domain.models import (
    Account,
    ExpenseStatRow,
    FamilyTotals,
    IncomeStatRow,
    LedgerStatistics,
)
from household_ledger.utils.decimal_utils import coerce_decimal


ZERO = Decimal("0")


def month_key(moment: datetime) -> str:
    """Return the ``YYYY-MM`` bucket of a timestamp."""
    return f"{moment.year:04d}-{moment.month:02d}"


def _empty() -> dict[CurrencyFamily, Decimal]:
    return {family: ZERO for family in CurrencyFamily}


def _freeze(totals: dict[CurrencyFamily, Decimal]) -> FamilyTotals:
    return FamilyTotals(
        usd=totals[CurrencyFamily.USD],
        usdt=totals[CurrencyFamily.USDT],
        cup=totals[CurrencyFamily.CUP],
    )


def _add(
    groups: dict[str, dict[CurrencyFamily, Decimal]],
    key: str,
    currency: Currency,
    amount: Decimal,
) -> None:
    bucket = groups.setdefault(key, _empty())
    bucket[currency_family(currency)] += amount


def compute_statistics(
    expenses: Iterable[ExpenseStatRow],
    incomes: Iterable[IncomeStatRow],
    accounts: Iterable[Account],
) -> LedgerStatistics:
    """Aggregate realized expenses, incomes and balances.

    Args:
        expenses: Realized expense rows of the user.
        incomes: Income rows of the user.
        accounts: Accounts the user belongs to.

    Returns:
        LedgerStatistics: Totals, breakdowns and available balances.
    """
    expense_totals = _empty()
    income_totals = _empty()
    by_payment_method: dict[str, dict[CurrencyFamily, Decimal]] = {}
    by_category: dict[str, dict[CurrencyFamily, Decimal]] = {}
    monthly_expenses: dict[str, dict[CurrencyFamily, Decimal]] = {}
    monthly_incomes: dict[str, dict[CurrencyFamily, Decimal]] = {}

    for row in expenses:
        amount = coerce_decimal(row.amount)
        expense_totals[currency_family(row.currency)] += amount
        _add(by_payment_method, row.payment_method, row.currency, amount)
        _add(by_category, row.category_name, row.currency, amount)
        _add(monthly_expenses, month_key(row.created_at), row.currency, amount)

    for row in incomes:
        amount = coerce_decimal(row.amount)
        income_totals[currency_family(row.currency)] += amount
        _add(monthly_incomes, month_key(row.created_at), row.currency, amount)

    available = {currency: ZERO for currency in Currency}
    for account in accounts:
        for currency, balance in account.balances().items():
            available[currency] += coerce_decimal(balance)

    balance = {
        family: income_totals[family] - expense_totals[family]
        for family in CurrencyFamily
    }
    return LedgerStatistics(
        expenses=_freeze(expense_totals),
        incomes=_freeze(income_totals),
        balance=_freeze(balance),
        by_payment_method={
            key: _freeze(value) for key, value in by_payment_method.items()
        },
        by_category={key: _freeze(value) for key, value in by_category.items()},
        monthly_expenses={
            key: _freeze(value) for key, value in sorted(monthly_expenses.items())
        },
        monthly_incomes={
            key: _freeze(value) for key, value in sorted(monthly_incomes.items())
        },
        available=available,
    )


__all__ = ["compute_statistics", "month_key"]
