"""Use cases for loans between household members."""

from dataclasses import replace

from household_ledger.application.use_cases.base import LedgerUseCase
from household_ledger.domain.currency import coerce_currency
from household_ledger.domain.errors import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from household_ledger.domain.models import (
    ChangeAction,
    EntityType,
    Loan,
    TransactionType,
)
from household_ledger.domain.models.commands import (
    CreateLoanCommand,
    PayLoanCommand,
)
from household_ledger.domain.services.validation import (
    optional_positive_amount,
    require_positive_amount,
    require_text,
)
from household_ledger.utils.utils import new_id, utc_now


def _is_party(loan: Loan, user_id: str) -> bool:
    return user_id in (loan.giver_id, loan.receiver_id)


class CreateLoanUseCase(LedgerUseCase):
    """Lend money from one of the caller's accounts to another member."""

    def execute(self, caller_id: str, command: CreateLoanCommand) -> Loan:
        """Create a loan.

        Args:
            caller_id: Authenticated user giving the loan.
            command: Loan parameters.

        Returns:
            Loan: The stored loan.

        Raises:
            ValidationError: If a required field is missing or malformed.
            NotFoundError: If the receiver or an account is not visible.
        """
        amount = require_positive_amount("amount", command.amount)
        currency = coerce_currency(command.currency)
        receiver_id = require_text("receiver_id", command.receiver_id)
        from_account_id = require_text("from_account_id", command.from_account_id)
        to_account_id = require_text("to_account_id", command.to_account_id)

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            receiver = uow.get_user(receiver_id)
            if receiver is None:
                raise NotFoundError("User", receiver_id)
            self._require_member_account(uow, from_account_id, caller_id)
            self._require_account(uow, to_account_id)
            self._lock_accounts(uow, [from_account_id, to_account_id])

            loan = Loan(
                id=new_id(),
                amount=amount,
                currency=currency,
                giver_id=caller_id,
                receiver_id=receiver_id,
                from_account_id=from_account_id,
                to_account_id=to_account_id,
                description=command.description,
                due_date=command.due_date,
                created_at=utc_now(),
            )
            uow.add_loan(loan)
            engine.apply_balance_delta(from_account_id, currency, -amount)
            engine.apply_balance_delta(to_account_id, currency, amount)
            engine.record_transaction(
                TransactionType.LOAN,
                amount,
                currency,
                f"Loan to {receiver.name}",
                loan.id,
                caller_id,
                from_account_id,
            )
            engine.record_change(
                ChangeAction.CREATE,
                EntityType.LOAN,
                loan.id,
                None,
                loan,
                caller_id,
                loan_id=loan.id,
            )

        self._logger.info(
            f"Loan {loan.id} created: {amount} {currency.value} "
            f"from {from_account_id} to {to_account_id}"
        )
        return loan


class PayLoanUseCase(LedgerUseCase):
    """Repay part or all of a loan, possibly in another currency."""

    def execute(self, caller_id: str, command: PayLoanCommand) -> Loan:
        """Register a loan payment.

        The balance effect uses the payment bucket and the raw payment
        amount; ``paid_amount`` grows by the amount converted to the loan's
        currency.

        Raises:
            ValidationError: If the payment is malformed, the loan is already
                paid, or a cross-currency payment lacks an exchange rate.
            NotFoundError: If the loan is not visible to the caller.
        """
        payment = require_positive_amount("payment_amount", command.payment_amount)
        payment_currency = (
            coerce_currency(command.payment_currency, "payment_currency")
            if command.payment_currency is not None
            else None
        )
        exchange_rate = optional_positive_amount(
            "exchange_rate", command.exchange_rate
        )

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            loan = uow.get_loan(command.loan_id, for_update=True)
            if loan is None or not _is_party(loan, caller_id):
                raise NotFoundError("Loan", command.loan_id)
            if loan.is_paid:
                raise ValidationError(
                    f"Loan {loan.id} is already paid", field="loan_id"
                )
            currency = payment_currency or loan.currency
            credited = payment
            if currency is not loan.currency:
                if exchange_rate is None:
                    raise ValidationError(
                        "exchange_rate is required when paying in another "
                        "currency",
                        field="exchange_rate",
                    )
                credited = payment * exchange_rate

            paid_amount = loan.paid_amount + credited
            is_paid = paid_amount >= loan.amount
            updated = replace(
                loan,
                paid_amount=paid_amount,
                is_paid=is_paid,
                paid_date=utc_now() if is_paid else loan.paid_date,
            )
            self._lock_accounts(uow, [loan.to_account_id, loan.from_account_id])
            engine.apply_balance_delta(loan.to_account_id, currency, -payment)
            engine.apply_balance_delta(loan.from_account_id, currency, payment)
            uow.update_loan(updated)
            receiver = uow.get_user(loan.receiver_id)
            receiver_name = receiver.name if receiver else loan.receiver_id
            engine.record_transaction(
                TransactionType.LOAN_PAYMENT,
                payment,
                currency,
                f"Loan payment from {receiver_name}",
                loan.id,
                caller_id,
                loan.from_account_id,
            )
            engine.record_change(
                ChangeAction.UPDATE,
                EntityType.LOAN,
                loan.id,
                loan,
                updated,
                caller_id,
                loan_id=loan.id,
            )

        self._logger.info(
            f"Loan {loan.id} payment: {payment} {currency.value}, "
            f"paid {paid_amount}/{loan.amount}"
        )
        return updated


class DeleteLoanUseCase(LedgerUseCase):
    """Remove a loan, giving back whatever is still outstanding."""

    def execute(self, caller_id: str, loan_id: str) -> Loan:
        """Delete a loan.

        Raises:
            NotFoundError: If the loan is not visible to the caller.
            UnauthorizedError: If the caller is not the giver.
        """
        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            loan = uow.get_loan(loan_id, for_update=True)
            if loan is None or not _is_party(loan, caller_id):
                raise NotFoundError("Loan", loan_id)
            if loan.giver_id != caller_id:
                raise UnauthorizedError(
                    f"Only the giver can delete loan {loan_id}"
                )
            if not loan.is_paid:
                self._lock_accounts(
                    uow, [loan.from_account_id, loan.to_account_id]
                )
                remaining = loan.outstanding
                engine.apply_balance_delta(
                    loan.from_account_id, loan.currency, remaining
                )
                engine.apply_balance_delta(
                    loan.to_account_id, loan.currency, -remaining
                )
            uow.delete_loan(loan.id)
            engine.record_change(
                ChangeAction.DELETE,
                EntityType.LOAN,
                loan.id,
                loan,
                None,
                caller_id,
            )

        self._logger.info(f"Loan {loan_id} deleted")
        return loan


__all__ = ["CreateLoanUseCase", "PayLoanUseCase", "DeleteLoanUseCase"]
