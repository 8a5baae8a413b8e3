"""Application use cases."""

from .conversions import CreateConversionUseCase
from .debts import CreateDebtUseCase, DeleteDebtUseCase, PayDebtUseCase
from .expenses import (
    CreateExpenseUseCase,
    DeleteExpenseUseCase,
    UpdateExpenseUseCase,
)
from .get_statistics import GetStatisticsUseCase
from .incomes import CreateIncomeUseCase, DeleteIncomeUseCase, UpdateIncomeUseCase
from .ledger_engine import LedgerMutationEngine
from .loans import CreateLoanUseCase, DeleteLoanUseCase, PayLoanUseCase
from .seed_household import SeedHouseholdResult, SeedHouseholdUseCase
from .transfers import CreateTransferUseCase

__all__ = [
    "CreateConversionUseCase",
    "CreateDebtUseCase",
    "DeleteDebtUseCase",
    "PayDebtUseCase",
    "CreateExpenseUseCase",
    "DeleteExpenseUseCase",
    "UpdateExpenseUseCase",
    "GetStatisticsUseCase",
    "CreateIncomeUseCase",
    "DeleteIncomeUseCase",
    "UpdateIncomeUseCase",
    "LedgerMutationEngine",
    "CreateLoanUseCase",
    "DeleteLoanUseCase",
    "PayLoanUseCase",
    "SeedHouseholdResult",
    "SeedHouseholdUseCase",
    "CreateTransferUseCase",
]
