"""Domain models for reporting aggregates."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from household_ledger.domain.currency import Currency, CurrencyFamily


@dataclass(frozen=True)
class ExpenseStatRow:
    """Realized expense row used by the statistics aggregator."""

    amount: Decimal
    currency: Currency
    payment_method: str
    category_name: str
    created_at: datetime


@dataclass(frozen=True)
class IncomeStatRow:
    """Income row used by the statistics aggregator."""

    amount: Decimal
    currency: Currency
    created_at: datetime


@dataclass(frozen=True)
class FamilyTotals:
    """Amounts per currency family."""

    usd: Decimal = Decimal("0")
    usdt: Decimal = Decimal("0")
    cup: Decimal = Decimal("0")

    def get(self, family: CurrencyFamily) -> Decimal:
        if family is CurrencyFamily.USD:
            return self.usd
        if family is CurrencyFamily.USDT:
            return self.usdt
        return self.cup

    def as_dict(self) -> dict[str, Decimal]:
        return {"USD": self.usd, "USDT": self.usdt, "CUP": self.cup}


@dataclass(frozen=True)
class LedgerStatistics:
    """Reporting view over a user's realized expenses and incomes.

    Attributes:
        expenses: Expense totals per family.
        incomes: Income totals per family.
        balance: Incomes minus expenses per family.
        by_payment_method: Expense totals per payment method.
        by_category: Expense totals per category name.
        monthly_expenses: Expense totals keyed by ``YYYY-MM``.
        monthly_incomes: Income totals keyed by ``YYYY-MM``.
        available: Current balance per bucket across the user's accounts.
    """

    expenses: FamilyTotals
    incomes: FamilyTotals
    balance: FamilyTotals
    by_payment_method: dict[str, FamilyTotals] = field(default_factory=dict)
    by_category: dict[str, FamilyTotals] = field(default_factory=dict)
    monthly_expenses: dict[str, FamilyTotals] = field(default_factory=dict)
    monthly_incomes: dict[str, FamilyTotals] = field(default_factory=dict)
    available: dict[Currency, Decimal] = field(default_factory=dict)


__all__ = [
    "ExpenseStatRow",
    "IncomeStatRow",
    "FamilyTotals",
    "LedgerStatistics",
]
