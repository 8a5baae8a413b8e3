"""Use cases for debts owed to creditors outside the household."""

from dataclasses import replace

from household_ledger.application.use_cases.base import LedgerUseCase
from household_ledger.domain.currency import coerce_currency
from household_ledger.domain.errors import NotFoundError, ValidationError
from household_ledger.domain.models import (
    ChangeAction,
    Debt,
    EntityType,
    TransactionType,
)
from household_ledger.domain.models.commands import (
    CreateDebtCommand,
    PayDebtCommand,
)
from household_ledger.domain.services.validation import (
    require_positive_amount,
    require_text,
)
from household_ledger.utils.utils import new_id, utc_now


class CreateDebtUseCase(LedgerUseCase):
    """Book a debt and take its amount out of the account."""

    def execute(self, caller_id: str, command: CreateDebtCommand) -> Debt:
        """Create a debt.

        Args:
            caller_id: Authenticated user taking the debt.
            command: Debt parameters.

        Returns:
            Debt: The stored debt.

        Raises:
            ValidationError: If a required field is missing or malformed.
            NotFoundError: If the account is not visible.
        """
        amount = require_positive_amount("amount", command.amount)
        currency = coerce_currency(command.currency)
        creditor = require_text("creditor", command.creditor)
        account_id = require_text("account_id", command.account_id)

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            account = self._require_member_account(
                uow, account_id, caller_id, for_update=True
            )
            debt = Debt(
                id=new_id(),
                amount=amount,
                currency=currency,
                creditor=creditor,
                account_id=account_id,
                user_id=caller_id,
                description=command.description,
                due_date=command.due_date,
                created_at=utc_now(),
            )
            uow.add_debt(debt)
            engine.apply_balance_delta(account_id, currency, -amount)
            engine.record_transaction(
                TransactionType.DEBT,
                -amount,
                currency,
                f"Debt to {creditor}",
                debt.id,
                caller_id,
                account_id,
            )
            engine.record_change(
                ChangeAction.CREATE,
                EntityType.DEBT,
                debt.id,
                None,
                debt,
                caller_id,
                debt_id=debt.id,
            )

        self._logger.info(
            f"Debt {debt.id} created: {amount} {currency.value} to {creditor}"
        )
        if account.balance_for(currency) < amount:
            self._logger.warning(f"Debt {debt.id} overdraws account {account_id}")
        return debt


class PayDebtUseCase(LedgerUseCase):
    """Register a payment towards a debt.

    Only ``paid_amount`` moves; no account balance is touched.
    """

    def execute(self, caller_id: str, command: PayDebtCommand) -> Debt:
        payment = require_positive_amount("payment_amount", command.payment_amount)

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            debt = uow.get_debt(command.debt_id, caller_id, for_update=True)
            if debt is None:
                raise NotFoundError("Debt", command.debt_id)
            if debt.is_paid:
                raise ValidationError(
                    f"Debt {debt.id} is already paid", field="debt_id"
                )
            paid_amount = debt.paid_amount + payment
            is_paid = paid_amount >= debt.amount
            updated = replace(
                debt,
                paid_amount=paid_amount,
                is_paid=is_paid,
                paid_date=utc_now() if is_paid else debt.paid_date,
            )
            uow.update_debt(updated)
            engine.record_transaction(
                TransactionType.DEBT_PAYMENT,
                payment,
                debt.currency,
                f"Debt payment to {debt.creditor}",
                debt.id,
                caller_id,
                debt.account_id,
            )
            engine.record_change(
                ChangeAction.UPDATE,
                EntityType.DEBT,
                debt.id,
                debt,
                updated,
                caller_id,
                debt_id=debt.id,
            )

        self._logger.info(
            f"Debt {debt.id} payment: {payment}, paid {paid_amount}/{debt.amount}"
        )
        return updated


class DeleteDebtUseCase(LedgerUseCase):
    """Remove a debt, restoring what was not yet paid."""

    def execute(self, caller_id: str, debt_id: str) -> Debt:
        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            debt = uow.get_debt(debt_id, caller_id, for_update=True)
            if debt is None:
                raise NotFoundError("Debt", debt_id)
            if not debt.is_paid:
                engine.apply_balance_delta(
                    debt.account_id, debt.currency, debt.outstanding
                )
            uow.delete_debt(debt.id)
            engine.record_change(
                ChangeAction.DELETE,
                EntityType.DEBT,
                debt.id,
                debt,
                None,
                caller_id,
            )

        self._logger.info(f"Debt {debt_id} deleted")
        return debt


__all__ = ["CreateDebtUseCase", "PayDebtUseCase", "DeleteDebtUseCase"]
