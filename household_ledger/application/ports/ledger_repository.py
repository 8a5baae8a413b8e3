"""Ports for transactional access to the ledger store.

A :class:`LedgerUnitOfWorkPort` is bound to one database transaction: every
read and write made through it becomes durable together when the
``unit_of_work()`` block exits normally, and is discarded when it raises.
"""

from collections.abc import Sequence
from contextlib import AbstractContextManager
from decimal import Decimal
from typing import Protocol

from household_ledger.domain.currency import Currency
from household_ledger.domain.models import (
    Account,
    AccountMember,
    AccountRole,
    Category,
    Change,
    Conversion,
    Debt,
    Expense,
    ExpenseAllocation,
    Income,
    Loan,
    Transaction,
    Transfer,
    User,
)


class LedgerUnitOfWorkPort(Protocol):
    """Reads and writes performed inside one atomic unit of work."""

    # Accounts and members

    def get_account(
        self,
        account_id: str,
        for_update: bool = False,
    ) -> Account | None:
        """Return an account, optionally locking its row."""

    def lock_accounts(self, account_ids: Sequence[str]) -> dict[str, Account]:
        """Lock the rows of several accounts in ascending id order.

        Units of work that move money in several accounts take all their
        account locks here, before the first balance update.

        Returns:
            dict[str, Account]: Locked accounts by id; missing ids are absent.
        """

    def is_account_member(self, account_id: str, user_id: str) -> bool:
        """Return True when the user is linked to the account."""

    def list_account_members(self, account_id: str) -> list[AccountMember]:
        """Return the members of an account ordered by join order."""

    def find_personal_account(self, user_id: str) -> Account | None:
        """Return the oldest non-shared account the user owns."""

    def get_user(self, user_id: str) -> User | None:
        """Return a user."""

    def apply_balance_delta(
        self,
        account_id: str,
        currency: Currency,
        delta: Decimal,
    ) -> bool:
        """Add ``delta`` to one bucket in place.

        Returns:
            bool: False when the account does not exist.
        """

    def debit_if_sufficient(
        self,
        account_id: str,
        currency: Currency,
        amount: Decimal,
    ) -> bool:
        """Subtract ``amount`` only if the bucket holds at least that much.

        Returns:
            bool: True when the debit was applied.
        """

    # Audit

    def add_transaction(self, transaction: Transaction) -> None:
        """Append a ledger transaction row."""

    def add_change(self, change: Change) -> None:
        """Append a change-audit row."""

    # Expenses

    def add_expense(self, expense: Expense) -> None: ...

    def get_expense(
        self,
        expense_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> Expense | None: ...

    def update_expense(self, expense: Expense) -> None: ...

    def delete_expense(self, expense_id: str) -> None: ...

    def add_expense_allocations(
        self,
        allocations: Sequence[ExpenseAllocation],
    ) -> None:
        """Store the member shares charged for a shared expense."""

    def list_expense_allocations(self, expense_id: str) -> list[ExpenseAllocation]:
        """Return the stored member shares of an expense."""

    def delete_expense_allocations(self, expense_id: str) -> None: ...

    # Incomes

    def add_income(self, income: Income) -> None: ...

    def get_income(
        self,
        income_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> Income | None: ...

    def update_income(self, income: Income) -> None: ...

    def delete_income(self, income_id: str) -> None: ...

    # Conversions and transfers

    def add_conversion(self, conversion: Conversion) -> None: ...

    def add_transfer(self, transfer: Transfer) -> None: ...

    # Loans

    def add_loan(self, loan: Loan) -> None: ...

    def get_loan(self, loan_id: str, for_update: bool = False) -> Loan | None: ...

    def update_loan(self, loan: Loan) -> None: ...

    def delete_loan(self, loan_id: str) -> None: ...

    def list_pending_loans_to_account(
        self,
        account_id: str,
        currencies: Sequence[Currency],
        personal_origin_only: bool = False,
    ) -> list[Loan]:
        """Return unpaid loans credited to an account, locking them.

        Loans are ordered by ``created_at``; loans sharing a timestamp are
        ordered by id, which does not reflect their creation order.
        """

    # Debts

    def add_debt(self, debt: Debt) -> None: ...

    def get_debt(
        self,
        debt_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> Debt | None: ...

    def update_debt(self, debt: Debt) -> None: ...

    def delete_debt(self, debt_id: str) -> None: ...

    # Household setup

    def add_user(self, user: User) -> None: ...

    def add_account(self, account: Account) -> None: ...

    def add_account_member(
        self,
        account_id: str,
        user_id: str,
        role: AccountRole,
    ) -> None: ...

    def add_category(self, category: Category) -> None: ...

    def get_category(self, category_id: str) -> Category | None: ...


class LedgerRepositoryPort(Protocol):
    """Port opening atomic units of work against the ledger store."""

    def unit_of_work(self) -> AbstractContextManager[LedgerUnitOfWorkPort]:
        """Open a unit of work committed on normal exit, rolled back on error."""


__all__ = ["LedgerUnitOfWorkPort", "LedgerRepositoryPort"]
