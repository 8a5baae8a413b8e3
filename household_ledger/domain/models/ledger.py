"""Domain models for the money-moving entities of the ledger."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from household_ledger.domain.currency import Currency


class PaymentMethod(str, Enum):
    CASH = "CASH"
    TRANSFER = "TRANSFER"


class ExpenseType(str, Enum):
    """Only realized expenses move money; planned ones are reminders."""

    REALIZED = "REALIZED"
    PLANNED = "PLANNED"


@dataclass(frozen=True)
class Expense:
    id: str
    amount: Decimal
    currency: Currency
    payment_method: PaymentMethod
    expense_type: ExpenseType
    is_shared: bool
    account_id: str
    category_id: str
    user_id: str
    description: str | None = None
    planned_date: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_planned(self) -> bool:
        return self.expense_type is ExpenseType.PLANNED


@dataclass(frozen=True)
class ExpenseAllocation:
    """Share of a shared expense charged to one member's account."""

    expense_id: str
    user_id: str
    account_id: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class Income:
    """Income credited to an account.

    When ``converted_to_cup`` is set the income arrived in USD and was
    credited to the account in CUP at ``exchange_rate``. ``conversion_id``
    points at the conversion that produced the income, if any.
    """

    id: str
    amount: Decimal
    currency: Currency
    account_id: str
    user_id: str
    description: str | None = None
    converted_to_cup: bool = False
    exchange_rate: Decimal | None = None
    conversion_id: str | None = None
    created_at: datetime | None = None

    @property
    def is_derived(self) -> bool:
        return self.converted_to_cup or self.conversion_id is not None


@dataclass(frozen=True)
class Conversion:
    """Immutable record of value moved between two buckets."""

    id: str
    from_amount: Decimal
    to_amount: Decimal
    from_currency: Currency
    to_currency: Currency
    exchange_rate: Decimal
    user_id: str
    from_account_id: str
    to_account_id: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class Loan:
    """Money lent by one member (giver) to another (receiver)."""

    id: str
    amount: Decimal
    currency: Currency
    giver_id: str
    receiver_id: str
    from_account_id: str
    to_account_id: str
    paid_amount: Decimal = Decimal("0")
    is_paid: bool = False
    description: str | None = None
    due_date: datetime | None = None
    paid_date: datetime | None = None
    created_at: datetime | None = None

    @property
    def outstanding(self) -> Decimal:
        return self.amount - self.paid_amount


@dataclass(frozen=True)
class Debt:
    """Money owed to an external creditor."""

    id: str
    amount: Decimal
    currency: Currency
    creditor: str
    account_id: str
    user_id: str
    paid_amount: Decimal = Decimal("0")
    is_paid: bool = False
    description: str | None = None
    due_date: datetime | None = None
    paid_date: datetime | None = None
    created_at: datetime | None = None

    @property
    def outstanding(self) -> Decimal:
        return self.amount - self.paid_amount


@dataclass(frozen=True)
class Transfer:
    id: str
    amount: Decimal
    currency: Currency
    user_id: str
    from_account_id: str
    to_account_id: str
    description: str | None = None
    created_at: datetime | None = None


__all__ = [
    "PaymentMethod",
    "ExpenseType",
    "Expense",
    "ExpenseAllocation",
    "Income",
    "Conversion",
    "Loan",
    "Debt",
    "Transfer",
]
