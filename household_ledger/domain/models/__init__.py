"""Domain models package."""

from .accounts import Account, AccountMember, AccountRole, Category, User
from .audit import (
    Change,
    ChangeAction,
    EntityType,
    Transaction,
    TransactionType,
)
from .ledger import (
    Conversion,
    Debt,
    Expense,
    ExpenseAllocation,
    ExpenseType,
    Income,
    Loan,
    PaymentMethod,
    Transfer,
)
from .statistics import (
    ExpenseStatRow,
    FamilyTotals,
    IncomeStatRow,
    LedgerStatistics,
)

__all__ = [
    "Account",
    "AccountMember",
    "AccountRole",
    "Category",
    "User",
    "Change",
    "ChangeAction",
    "EntityType",
    "Transaction",
    "TransactionType",
    "Conversion",
    "Debt",
    "Expense",
    "ExpenseAllocation",
    "ExpenseType",
    "Income",
    "Loan",
    "PaymentMethod",
    "Transfer",
    "ExpenseStatRow",
    "FamilyTotals",
    "IncomeStatRow",
    "LedgerStatistics",
]
