"""Use case moving value between currency buckets at an exchange rate."""

from household_ledger.application.use_cases.base import LedgerUseCase
from household_ledger.application.use_cases.loan_sweep import (
    lock_pending_loans,
    sweep_pending_loans,
)
from household_ledger.domain.currency import coerce_currency, is_cup
from household_ledger.domain.errors import ValidationError
from household_ledger.domain.models import (
    ChangeAction,
    Conversion,
    EntityType,
    Income,
    TransactionType,
)
from household_ledger.domain.models.commands import CreateConversionCommand
from household_ledger.domain.services.validation import (
    require_positive_amount,
    require_text,
)
from household_ledger.utils.utils import new_id, utc_now


class CreateConversionUseCase(LedgerUseCase):
    """Convert an amount from one bucket into another.

    When the converted CUP lands on a different, shared account it is also
    booked there as an income and used to repay loans that members made to
    that account from their personal accounts.
    """

    def execute(
        self,
        caller_id: str,
        command: CreateConversionCommand,
    ) -> Conversion:
        """Create a conversion.

        Args:
            caller_id: Authenticated user converting the funds.
            command: Conversion parameters.

        Returns:
            Conversion: The stored conversion record.

        Raises:
            ValidationError: If a required field is missing or malformed.
            NotFoundError: If an account is not visible.
        """
        from_amount = require_positive_amount("from_amount", command.from_amount)
        from_currency = coerce_currency(command.from_currency, "from_currency")
        to_currency = coerce_currency(command.to_currency, "to_currency")
        exchange_rate = require_positive_amount(
            "exchange_rate", command.exchange_rate
        )
        from_account_id = require_text("from_account_id", command.from_account_id)
        to_account_id = command.to_account_id or from_account_id
        if to_account_id == from_account_id and to_currency is from_currency:
            raise ValidationError(
                "Source and target bucket are the same",
                field="to_currency",
            )
        to_amount = from_amount * exchange_rate

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            source = self._require_member_account(uow, from_account_id, caller_id)
            target = self._require_account(uow, to_account_id)
            books_income = (
                target.id != source.id and target.is_shared and is_cup(to_currency)
            )
            pending = (
                lock_pending_loans(uow, target.id, personal_origin_only=True)
                if books_income
                else []
            )
            self._lock_accounts(
                uow,
                [
                    source.id,
                    target.id,
                    *(loan.from_account_id for loan in pending),
                ],
            )

            engine.apply_balance_delta(source.id, from_currency, -from_amount)
            engine.apply_balance_delta(target.id, to_currency, to_amount)
            conversion = Conversion(
                id=new_id(),
                from_amount=from_amount,
                to_amount=to_amount,
                from_currency=from_currency,
                to_currency=to_currency,
                exchange_rate=exchange_rate,
                user_id=caller_id,
                from_account_id=source.id,
                to_account_id=target.id,
                created_at=utc_now(),
            )
            uow.add_conversion(conversion)
            engine.record_transaction(
                TransactionType.CONVERSION,
                from_amount,
                from_currency,
                f"Converted {from_amount} {from_currency.value} to "
                f"{to_amount:.2f} {to_currency.value}",
                conversion.id,
                caller_id,
                source.id,
            )

            if books_income:
                income = Income(
                    id=new_id(),
                    amount=to_amount,
                    currency=to_currency,
                    account_id=target.id,
                    user_id=caller_id,
                    description=f"Conversion from {source.name}",
                    conversion_id=conversion.id,
                    created_at=utc_now(),
                )
                uow.add_income(income)
                engine.record_transaction(
                    TransactionType.INCOME,
                    to_amount,
                    to_currency,
                    income.description,
                    income.id,
                    caller_id,
                    target.id,
                )
                engine.record_change(
                    ChangeAction.CREATE,
                    EntityType.INCOME,
                    income.id,
                    None,
                    income,
                    caller_id,
                    income_id=income.id,
                )
                sweep_pending_loans(
                    uow,
                    engine,
                    pending,
                    target.id,
                    to_amount,
                    caller_id,
                    self._logger,
                )

        self._logger.info(
            f"Conversion {conversion.id}: {from_amount} {from_currency.value} "
            f"-> {to_amount} {to_currency.value}"
        )
        return conversion


__all__ = ["CreateConversionUseCase"]
