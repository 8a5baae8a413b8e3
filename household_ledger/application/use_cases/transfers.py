"""Use case moving funds between two accounts in the same bucket."""

from household_ledger.application.use_cases.base import LedgerUseCase
from household_ledger.domain.currency import coerce_currency
from household_ledger.domain.errors import ValidationError
from household_ledger.domain.models import Transfer, TransactionType
from household_ledger.domain.models.commands import CreateTransferCommand
from household_ledger.domain.services.validation import (
    require_positive_amount,
    require_text,
)
from household_ledger.utils.utils import new_id, utc_now


class CreateTransferUseCase(LedgerUseCase):
    """Transfer an amount between accounts, refusing to overdraw the source."""

    def execute(self, caller_id: str, command: CreateTransferCommand) -> Transfer:
        """Create a transfer.

        Args:
            caller_id: Authenticated user moving the funds.
            command: Transfer parameters.

        Returns:
            Transfer: The stored transfer.

        Raises:
            ValidationError: If a field is malformed or both accounts match.
            NotFoundError: If an account is not visible.
            InsufficientFundsError: If the source bucket cannot cover the
                amount. Nothing is written in that case.
        """
        amount = require_positive_amount("amount", command.amount)
        currency = coerce_currency(command.currency)
        from_account_id = require_text("from_account_id", command.from_account_id)
        to_account_id = require_text("to_account_id", command.to_account_id)
        if from_account_id == to_account_id:
            raise ValidationError(
                "Cannot transfer to the same account", field="to_account_id"
            )

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            source = self._require_member_account(uow, from_account_id, caller_id)
            target = self._require_account(uow, to_account_id)
            self._lock_accounts(uow, [source.id, target.id])
            engine.debit_with_funds_check(source.id, currency, amount)
            engine.apply_balance_delta(target.id, currency, amount)

            description = (
                command.description
                or f"Transfer from {source.name} to {target.name}"
            )
            transfer = Transfer(
                id=new_id(),
                amount=amount,
                currency=currency,
                user_id=caller_id,
                from_account_id=source.id,
                to_account_id=target.id,
                description=description,
                created_at=utc_now(),
            )
            uow.add_transfer(transfer)
            for account_id in (source.id, target.id):
                engine.record_transaction(
                    TransactionType.TRANSFER,
                    amount,
                    currency,
                    description,
                    transfer.id,
                    caller_id,
                    account_id,
                )

        self._logger.info(
            f"Transfer {transfer.id}: {amount} {currency.value} "
            f"from {source.id} to {target.id}"
        )
        return transfer


__all__ = ["CreateTransferUseCase"]
