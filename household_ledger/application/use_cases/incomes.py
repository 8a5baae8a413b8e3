"""Use cases for recording, editing and removing incomes."""

from dataclasses import replace
from decimal import Decimal

from household_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerUnitOfWorkPort,
)
from household_ledger.application.use_cases.base import LedgerUseCase
from household_ledger.application.use_cases.ledger_engine import (
    LedgerMutationEngine,
)
from household_ledger.application.use_cases.loan_sweep import (
    lock_pending_loans,
    sweep_pending_loans,
)
from household_ledger.domain.currency import (
    CUP_CONVERSION_TARGETS,
    coerce_currency,
    is_usd,
)
from household_ledger.domain.errors import NotFoundError, ValidationError
from household_ledger.domain.models import (
    Account,
    ChangeAction,
    Conversion,
    EntityType,
    Income,
    TransactionType,
)
from household_ledger.domain.models.commands import (
    CreateIncomeCommand,
    UpdateIncomeCommand,
)
from household_ledger.domain.services.allocation import compute_allocations
from household_ledger.domain.services.validation import (
    optional_positive_amount,
    require_positive_amount,
    require_text,
)
from household_ledger.utils.utils import new_id, utc_now


class CreateIncomeUseCase(LedgerUseCase):
    """Credit an income, optionally converting shared USD income to CUP.

    The conversion path draws each member's USD share from the principal
    bank account, credits the converted CUP amount to the shared account and
    then repays pending CUP loans owed by the shared account.
    """

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        principal_account_id: str | None = None,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port opening units of work on the ledger.
            principal_account_id: Account debited by the USD to CUP path.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for the balance mutation trail.
        """
        super().__init__(ledger_repository, logger, usage_logger)
        self._principal_account_id = principal_account_id

    def execute(self, caller_id: str, command: CreateIncomeCommand) -> Income:
        """Create an income.

        Args:
            caller_id: Authenticated user recording the income.
            command: Income parameters.

        Returns:
            Income: The stored income.

        Raises:
            ValidationError: If a required field is missing or malformed, or
                the conversion path is requested without a principal account.
            NotFoundError: If an account is not visible.
        """
        amount = require_positive_amount("amount", command.amount)
        currency = coerce_currency(command.currency)
        account_id = require_text("account_id", command.account_id)
        exchange_rate = None
        if command.convert_to_cup:
            exchange_rate = require_positive_amount(
                "exchange_rate", command.exchange_rate
            )

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            account = self._require_member_account(uow, account_id, caller_id)
            converts = (
                exchange_rate is not None
                and account.is_shared
                and is_usd(currency)
            )
            if exchange_rate is not None and not converts:
                self._logger.warning(
                    f"CUP conversion ignored for {currency.value} income on "
                    f"account {account_id}"
                )
            if converts:
                income = self._create_converted(
                    uow, engine, caller_id, command, account, amount,
                    currency, exchange_rate,
                )
            else:
                self._lock_accounts(uow, [account_id])
                income = Income(
                    id=new_id(),
                    amount=amount,
                    currency=currency,
                    account_id=account_id,
                    user_id=caller_id,
                    description=command.description,
                    created_at=command.created_at or utc_now(),
                )
                uow.add_income(income)
                engine.apply_balance_delta(account_id, currency, amount)
                engine.record_transaction(
                    TransactionType.INCOME,
                    amount,
                    currency,
                    income.description,
                    income.id,
                    caller_id,
                    account_id,
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

        self._logger.info(
            f"Income {income.id} created: {amount} {currency.value} "
            f"on account {account_id}"
        )
        return income

    def _create_converted(
        self,
        uow: LedgerUnitOfWorkPort,
        engine: LedgerMutationEngine,
        caller_id: str,
        command: CreateIncomeCommand,
        account: Account,
        amount,
        currency,
        exchange_rate,
    ) -> Income:
        if not self._principal_account_id:
            raise ValidationError(
                "A principal account is required to convert income to CUP",
                field="principal_account_id",
            )
        principal = self._require_account(uow, self._principal_account_id)
        pending = lock_pending_loans(uow, account.id)
        self._lock_accounts(
            uow,
            [
                principal.id,
                account.id,
                *(loan.from_account_id for loan in pending),
            ],
        )

        members = [member.user for member in uow.list_account_members(account.id)]
        drawn = Decimal("0")
        for allocation in compute_allocations(
            members, currency, amount, self._logger
        ):
            if allocation.amount == 0:
                continue
            engine.apply_balance_delta(principal.id, currency, -allocation.amount)
            drawn += allocation.amount
        if drawn == 0:
            self._logger.warning(
                f"Nothing drawn from principal account {principal.id} for "
                f"{amount} {currency.value}; the CUP credit is not backed by "
                "a member share"
            )

        cup_currency = CUP_CONVERSION_TARGETS[currency]
        converted = amount * exchange_rate
        engine.apply_balance_delta(account.id, cup_currency, converted)

        conversion = Conversion(
            id=new_id(),
            from_amount=amount,
            to_amount=converted,
            from_currency=currency,
            to_currency=cup_currency,
            exchange_rate=exchange_rate,
            user_id=caller_id,
            from_account_id=principal.id,
            to_account_id=account.id,
            created_at=utc_now(),
        )
        uow.add_conversion(conversion)
        income = Income(
            id=new_id(),
            amount=amount,
            currency=currency,
            account_id=account.id,
            user_id=caller_id,
            description=command.description,
            converted_to_cup=True,
            exchange_rate=exchange_rate,
            conversion_id=conversion.id,
            created_at=command.created_at or utc_now(),
        )
        uow.add_income(income)
        engine.record_transaction(
            TransactionType.INCOME,
            converted,
            cup_currency,
            command.description
            or f"Converted {amount} {currency.value} to {cup_currency.value}",
            income.id,
            caller_id,
            account.id,
        )
        sweep_pending_loans(
            uow, engine, pending, account.id, converted, caller_id, self._logger
        )
        return income


def _require_plain_income(income: Income) -> None:
    if income.is_derived:
        raise ValidationError(
            f"Income {income.id} comes from a conversion and cannot be changed",
            field="income_id",
        )


class UpdateIncomeUseCase(LedgerUseCase):
    """Edit an income, moving its credit to the new amount and bucket."""

    def execute(self, caller_id: str, command: UpdateIncomeCommand) -> Income:
        changes: dict = {}
        amount = optional_positive_amount("amount", command.amount)
        if amount is not None:
            changes["amount"] = amount
        if command.currency is not None:
            changes["currency"] = coerce_currency(command.currency)
        if command.description is not None:
            changes["description"] = command.description
        if command.created_at is not None:
            changes["created_at"] = command.created_at

        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            existing = uow.get_income(command.income_id, caller_id, for_update=True)
            if existing is None:
                raise NotFoundError("Income", command.income_id)
            _require_plain_income(existing)
            updated = replace(existing, **changes)
            engine.apply_balance_delta(
                existing.account_id, existing.currency, -existing.amount
            )
            engine.apply_balance_delta(
                updated.account_id, updated.currency, updated.amount
            )
            uow.update_income(updated)
            engine.record_change(
                ChangeAction.UPDATE,
                EntityType.INCOME,
                updated.id,
                existing,
                updated,
                caller_id,
                income_id=updated.id,
            )

        self._logger.info(f"Income {updated.id} updated: {sorted(changes)}")
        return updated


class DeleteIncomeUseCase(LedgerUseCase):
    """Remove an income and take its credit back."""

    def execute(self, caller_id: str, income_id: str) -> Income:
        with self._ledger_repository.unit_of_work() as uow:
            engine = self._engine(uow)
            existing = uow.get_income(income_id, caller_id, for_update=True)
            if existing is None:
                raise NotFoundError("Income", income_id)
            _require_plain_income(existing)
            engine.apply_balance_delta(
                existing.account_id, existing.currency, -existing.amount
            )
            uow.delete_income(existing.id)
            engine.record_change(
                ChangeAction.DELETE,
                EntityType.INCOME,
                existing.id,
                existing,
                None,
                caller_id,
            )

        self._logger.info(f"Income {income_id} deleted")
        return existing


__all__ = [
    "CreateIncomeUseCase",
    "UpdateIncomeUseCase",
    "DeleteIncomeUseCase",
]
