"""Domain models for accounts, their members and categories."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from household_ledger.domain.currency import Currency, CurrencyFamily


class AccountRole(str, Enum):
    """Role of a user on an account."""

    OWNER = "owner"
    MEMBER = "member"


@dataclass(frozen=True)
class Account:
    """An account with one signed balance per currency bucket.

    Balances have no floor: overdraft is allowed unless an operation checks.
    """

    id: str
    name: str
    is_shared: bool = False
    balance_usd_zelle: Decimal = Decimal("0")
    balance_usd_efectivo: Decimal = Decimal("0")
    balance_usdt: Decimal = Decimal("0")
    balance_cup_efectivo: Decimal = Decimal("0")
    balance_cup_transferencia: Decimal = Decimal("0")
    created_at: datetime | None = None

    def balance_for(self, currency: Currency) -> Decimal:
        """Return the balance held in one bucket."""
        if currency is Currency.USD_ZELLE:
            return self.balance_usd_zelle
        if currency is Currency.USD_EFECTIVO:
            return self.balance_usd_efectivo
        if currency is Currency.USDT:
            return self.balance_usdt
        if currency is Currency.CUP_EFECTIVO:
            return self.balance_cup_efectivo
        if currency is Currency.CUP_TRANSFERENCIA:
            return self.balance_cup_transferencia
        raise ValueError(f"Unsupported currency bucket: {currency!r}")

    def balances(self) -> dict[Currency, Decimal]:
        return {currency: self.balance_for(currency) for currency in Currency}


@dataclass(frozen=True)
class User:
    """Household member with the figures used for proportional shares.

    Attributes:
        income_percentage: Fallback contribution weight (0-100).
        monthly_income_usd: Configured monthly income in USD.
        monthly_income_usdt: Configured monthly income in USDT.
        monthly_income_cup: Configured monthly income in CUP.
    """

    id: str
    name: str
    email: str
    income_percentage: Decimal = Decimal("0")
    monthly_income_usd: Decimal = Decimal("0")
    monthly_income_usdt: Decimal = Decimal("0")
    monthly_income_cup: Decimal = Decimal("0")
    created_at: datetime | None = None

    def monthly_income_for(self, family: CurrencyFamily) -> Decimal:
        """Return the configured monthly income in a currency family."""
        if family is CurrencyFamily.USD:
            return self.monthly_income_usd
        if family is CurrencyFamily.USDT:
            return self.monthly_income_usdt
        if family is CurrencyFamily.CUP:
            return self.monthly_income_cup
        raise ValueError(f"Unsupported currency family: {family!r}")


@dataclass(frozen=True)
class AccountMember:
    """A user linked to an account with a role."""

    user: User
    account_id: str
    role: AccountRole


@dataclass(frozen=True)
class Category:
    """Expense category."""

    id: str
    name: str
    color: str | None = None


__all__ = ["AccountRole", "Account", "User", "AccountMember", "Category"]
