"""Parameter structs accepted by the ledger operations.

Amounts and currencies may arrive as raw values from the calling layer; the
use cases validate and normalize them before touching the store. ``None`` on
an update command means "leave unchanged".
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CreateExpenseCommand:
    amount: object
    currency: object
    payment_method: object
    account_id: str
    category_id: str
    expense_type: object = "REALIZED"
    is_shared: bool = False
    description: str | None = None
    planned_date: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class UpdateExpenseCommand:
    expense_id: str
    amount: object = None
    currency: object = None
    payment_method: object = None
    expense_type: object = None
    is_shared: bool | None = None
    description: str | None = None
    planned_date: datetime | None = None
    category_id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class CreateIncomeCommand:
    amount: object
    currency: object
    account_id: str
    description: str | None = None
    created_at: datetime | None = None
    convert_to_cup: bool = False
    exchange_rate: object = None


@dataclass(frozen=True)
class UpdateIncomeCommand:
    income_id: str
    amount: object = None
    currency: object = None
    description: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class CreateConversionCommand:
    from_amount: object
    from_currency: object
    to_currency: object
    exchange_rate: object
    from_account_id: str
    to_account_id: str | None = None


@dataclass(frozen=True)
class CreateLoanCommand:
    amount: object
    currency: object
    receiver_id: str
    from_account_id: str
    to_account_id: str
    description: str | None = None
    due_date: datetime | None = None


@dataclass(frozen=True)
class PayLoanCommand:
    loan_id: str
    payment_amount: object
    payment_currency: object = None
    exchange_rate: object = None


@dataclass(frozen=True)
class CreateDebtCommand:
    amount: object
    currency: object
    creditor: str
    account_id: str
    description: str | None = None
    due_date: datetime | None = None


@dataclass(frozen=True)
class PayDebtCommand:
    debt_id: str
    payment_amount: object


@dataclass(frozen=True)
class CreateTransferCommand:
    amount: object
    currency: object
    from_account_id: str
    to_account_id: str
    description: str | None = None


__all__ = [
    "CreateExpenseCommand",
    "UpdateExpenseCommand",
    "CreateIncomeCommand",
    "UpdateIncomeCommand",
    "CreateConversionCommand",
    "CreateLoanCommand",
    "PayLoanCommand",
    "CreateDebtCommand",
    "PayDebtCommand",
    "CreateTransferCommand",
]
