"""Use cases for recording, editing and removing expenses."""

from dataclasses import replace

from household_ledger.application.ports.ledger_repository import (
    LedgerUnitOfWorkPort,
)
from household_ledger.application.use_cases.base import LedgerUseCase
from household_ledger.application.use_cases.ledger_engine import (
    LedgerMutationEngine,
)
from household_ledger.application.use_cases.shared_allocation import (
    MemberShare,
    allocate_to_members,
)
from household_ledger.domain.currency import coerce_currency
from household_ledger.domain.errors import NotFoundError
from household_ledger.domain.models import (
    Account,
    ChangeAction,
    EntityType,
    Expense,
    ExpenseAllocation,
    ExpenseType,
    PaymentMethod,
    TransactionType,
)
from household_ledger.domain.models.commands import (
    CreateExpenseCommand,
    UpdateExpenseCommand,
)
from household_ledger.domain.services.validation import (
    coerce_enum,
    optional_positive_amount,
    require_positive_amount,
    require_text,
)
from household_ledger.utils.utils import new_id, utc_now


def _is_split(expense: Expense, account: Account) -> bool:
    return expense.is_shared and account.is_shared


class _ExpenseUseCase(LedgerUseCase):
    def _plan_shares(
        self,
        uow: LedgerUnitOfWorkPort,
        expense: Expense,
        account: Account,
    ) -> list[MemberShare]:
        """Return the non-zero member shares a realized split expense costs."""
        if expense.is_planned or not _is_split(expense, account):
            return []
        shares = allocate_to_members(
            uow, account, expense.currency, expense.amount, self._logger
        )
        return [share for share in shares if share.amount != 0]

    def _charge(
        self,
        uow: LedgerUnitOfWorkPort,
        engine: LedgerMutationEngine,
        expense: Expense,
        account: Account,
        shares: list[MemberShare],
        record: bool,
    ) -> None:
        """Apply the balance effect of an expense.

        Planned expenses have no effect. Shared expenses on shared accounts are
        charged to the members through ``shares``, which are stored so the
        charge can be reversed exactly later on.
        """
        if expense.is_planned:
            return
        if not _is_split(expense, account):
            engine.apply_balance_delta(
                account.id, expense.currency, -expense.amount
            )
            if record:
                engine.record_transaction(
                    TransactionType.EXPENSE,
                    expense.amount,
                    expense.currency,
                    expense.description,
                    expense.id,
                    expense.user_id,
                    account.id,
                )
            return

        base = expense.description or "Shared expense"
        for share in shares:
            engine.apply_balance_delta(
                share.account_id, expense.currency, -share.amount
            )
            if record:
                engine.record_transaction(
                    TransactionType.EXPENSE,
                    share.amount,
                    expense.currency,
                    f"{base} ({share.percentage:.1f}%)",
                    expense.id,
                    share.user.id,
                    share.account_id,
                )
        uow.add_expense_allocations(
            [
                ExpenseAllocation(
                    expense_id=expense.id,
                    user_id=share.user.id,
                    account_id=share.account_id,
                    amount=share.amount,
                    percentage=share.percentage,
                )
                for share in shares
            ]
        )

    @staticmethod
    def _refund(
        uow: LedgerUnitOfWorkPort,
        engine: LedgerMutationEngine,
        expense: Expense,
        account: Account,
        allocations: list[ExpenseAllocation],
    ) -> None:
        """Give back what a stored expense was charged."""
        if expense.is_planned:
            return
        if not _is_split(expense, account):
            engine.apply_balance_delta(
                account.id, expense.currency, expense.amount
            )
            return
        for allocation in allocations:
            engine.apply_balance_delta(
                allocation.account_id, expense.currency, allocation.amount
            )
        uow.delete_expense_allocations(expense.id)

    @staticmethod
    def _require_category(uow: LedgerUnitOfWorkPort, category_id: str) -> None:
        if uow.get_category(category_id) is None:
            raise NotFoundError("Category", category_id)


class CreateExpenseUseCase(_ExpenseUseCase):
    """Record an expense and charge it to the account or its members."""

    def execute(self, caller_id: str, command: CreateExpenseCommand) -> Expense:
        """Create an expense.

        Args:
            caller_id: Authenticated user recording the expense.
            command: Expense parameters.

        Returns:
            Expense: The stored expense.

        Raises:
            ValidationError: If a required field is missing or malformed.
            NotFoundError: If the account or category is not visible.
        """
        amount = require_positive_amount("amount", command.amount)
        currency = coerce_currency(command.currency)
        payment_method = coerce_enum(
            PaymentMethod, "payment_method", command.payment_method
        )
        expense_type = coerce_enum(
            ExpenseType, "expense_type", command.expense_type
        )
        account_id = require_text("account_id", command.account_id)
        category_id = require_text("category_id", command.category_id)

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            account = self._require_member_account(uow, account_id, caller_id)
            self._require_category(uow, category_id)
            expense = Expense(
                id=new_id(),
                amount=amount,
                currency=currency,
                payment_method=payment_method,
                expense_type=expense_type,
                is_shared=bool(command.is_shared),
                account_id=account_id,
                category_id=category_id,
                user_id=caller_id,
                description=command.description,
                planned_date=command.planned_date,
                created_at=command.created_at or utc_now(),
            )
            shares = self._plan_shares(uow, expense, account)
            locked = self._lock_accounts(
                uow, [account.id, *(share.account_id for share in shares)]
            )
            account = locked[account.id]
            uow.add_expense(expense)
            self._charge(uow, engine, expense, account, shares, record=True)
            engine.record_change(
                ChangeAction.CREATE,
                EntityType.EXPENSE,
                expense.id,
                None,
                expense,
                caller_id,
                expense_id=expense.id,
            )

        self._logger.info(
            f"Expense {expense.id} created: {amount} {currency.value} "
            f"on account {account_id} ({expense_type.value})"
        )
        if (
            not expense.is_planned
            and not _is_split(expense, account)
            and account.balance_for(currency) < amount
        ):
            self._logger.warning(
                f"Expense {expense.id} may overdraw account {account_id}"
            )
        return expense


class UpdateExpenseUseCase(_ExpenseUseCase):
    """Edit an expense, reversing its old effect before applying the new one."""

    def execute(self, caller_id: str, command: UpdateExpenseCommand) -> Expense:
        """Update the supplied fields of an expense.

        The old effect is reversed from the shares stored when it was charged;
        the new effect is split with the members' current incomes.

        Args:
            caller_id: Authenticated user who recorded the expense.
            command: Expense id plus the fields to change.

        Returns:
            Expense: The updated expense.

        Raises:
            ValidationError: If a supplied field is malformed.
            NotFoundError: If the expense or category is not visible.
        """
        changes: dict = {}
        amount = optional_positive_amount("amount", command.amount)
        if amount is not None:
            changes["amount"] = amount
        if command.currency is not None:
            changes["currency"] = coerce_currency(command.currency)
        if command.payment_method is not None:
            changes["payment_method"] = coerce_enum(
                PaymentMethod, "payment_method", command.payment_method
            )
        if command.expense_type is not None:
            changes["expense_type"] = coerce_enum(
                ExpenseType, "expense_type", command.expense_type
            )
        for field in ("is_shared", "description", "planned_date", "created_at"):
            value = getattr(command, field)
            if value is not None:
                changes[field] = value
        if command.category_id is not None:
            changes["category_id"] = require_text(
                "category_id", command.category_id
            )

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            existing = uow.get_expense(
                command.expense_id, caller_id, for_update=True
            )
            if existing is None:
                raise NotFoundError("Expense", command.expense_id)
            account = self._require_account(uow, existing.account_id)
            if "category_id" in changes:
                self._require_category(uow, changes["category_id"])
            updated = replace(existing, **changes)

            allocations = uow.list_expense_allocations(existing.id)
            shares = self._plan_shares(uow, updated, account)
            self._lock_accounts(
                uow,
                [
                    account.id,
                    *(allocation.account_id for allocation in allocations),
                    *(share.account_id for share in shares),
                ],
            )
            self._refund(uow, engine, existing, account, allocations)
            self._charge(uow, engine, updated, account, shares, record=False)
            uow.update_expense(updated)
            engine.record_change(
                ChangeAction.UPDATE,
                EntityType.EXPENSE,
                updated.id,
                existing,
                updated,
                caller_id,
                expense_id=updated.id,
            )

        self._logger.info(f"Expense {updated.id} updated: {sorted(changes)}")
        return updated


class DeleteExpenseUseCase(_ExpenseUseCase):
    """Remove an expense and give its amount back."""

    def execute(self, caller_id: str, expense_id: str) -> Expense:
        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            existing = uow.get_expense(expense_id, caller_id, for_update=True)
            if existing is None:
                raise NotFoundError("Expense", expense_id)
            account = self._require_account(uow, existing.account_id)
            allocations = uow.list_expense_allocations(existing.id)
            self._lock_accounts(
                uow,
                [
                    account.id,
                    *(allocation.account_id for allocation in allocations),
                ],
            )
            self._refund(uow, engine, existing, account, allocations)
            uow.delete_expense(existing.id)
            engine.record_change(
                ChangeAction.DELETE,
                EntityType.EXPENSE,
                existing.id,
                existing,
                None,
                caller_id,
            )

        self._logger.info(f"Expense {expense_id} deleted")
        return existing


__all__ = [
    "CreateExpenseUseCase",
    "UpdateExpenseUseCase",
    "DeleteExpenseUseCase",
]
