"""Append-only audit records: ledger transactions and entity changes."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from household_ledger.domain.currency import Currency


class TransactionType(str, Enum):
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    LOAN = "LOAN"
    DEBT = "DEBT"
    CONVERSION = "CONVERSION"
    LOAN_PAYMENT = "LOAN_PAYMENT"
    DEBT_PAYMENT = "DEBT_PAYMENT"
    TRANSFER = "TRANSFER"


class ChangeAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class EntityType(str, Enum):
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    LOAN = "LOAN"
    DEBT = "DEBT"


@dataclass(frozen=True)
class Transaction:
    """One ledger line; ``reference_id`` points at the originating entity."""

    id: str
    type: TransactionType
    amount: Decimal
    currency: Currency
    user_id: str
    account_id: str
    reference_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Change:
    """Before/after snapshots of an entity mutation, serialized as JSON."""

    id: str
    action: ChangeAction
    entity_type: EntityType
    entity_id: str
    author_id: str
    old_value: str | None = None
    new_value: str | None = None
    expense_id: str | None = None
    income_id: str | None = None
    loan_id: str | None = None
    debt_id: str | None = None
    created_at: datetime | None = None


__all__ = [
    "TransactionType",
    "ChangeAction",
    "EntityType",
    "Transaction",
    "Change",
]
