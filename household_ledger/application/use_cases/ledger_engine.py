"""Ledger mutation engine.

The engine wraps the three primitives every money-moving operation is built
from: applying a signed delta to one currency bucket, appending a ledger
transaction and appending a change-audit row. It works on an open unit of
work; grouping calls into one atomic event is the caller's job.
"""

from decimal import Decimal

from household_ledger.application.ports.ledger_repository import (
    LedgerUnitOfWorkPort,
)
from household_ledger.domain.currency import Currency, coerce_currency
from household_ledger.domain.errors import InsufficientFundsError, NotFoundError
from household_ledger.domain.models import (
    Change,
    ChangeAction,
    EntityType,
    Transaction,
    TransactionType,
)
from household_ledger.domain.services.serialization import serialize_snapshot
from household_ledger.infrastructure.logging.logger import get_usage_logger
from household_ledger.utils.utils import new_id, utc_now


class LedgerMutationEngine:
    """Apply balance deltas and audit rows inside one unit of work."""

    def __init__(self, uow: LedgerUnitOfWorkPort, usage_logger=None) -> None:
        """Initialize the engine.

        Args:
            uow: Open unit of work all calls are made through.
            usage_logger: Optional logger for the mutation trail.
        """
        self._uow = uow
        self._usage_logger = usage_logger or get_usage_logger()

    def apply_balance_delta(
        self,
        account_id: str,
        currency: Currency,
        delta: Decimal,
    ) -> None:
        """Add a signed delta to one bucket of an account.

        No sign check is made on the resulting balance.

        Raises:
            ValidationError: If the currency is not a known bucket.
            NotFoundError: If the account does not exist.
        """
        bucket = coerce_currency(currency)
        if not self._uow.apply_balance_delta(account_id, bucket, delta):
            raise NotFoundError("Account", account_id)
        self._usage_logger.info(
            f"balance delta account={account_id} bucket={bucket.value} "
            f"delta={delta}"
        )

    def debit_with_funds_check(
        self,
        account_id: str,
        currency: Currency,
        amount: Decimal,
    ) -> None:
        """Subtract an amount only when the bucket can cover it.

        Raises:
            NotFoundError: If the account does not exist.
            InsufficientFundsError: If the bucket holds less than ``amount``.
        """
        bucket = coerce_currency(currency)
        if self._uow.debit_if_sufficient(account_id, bucket, amount):
            self._usage_logger.info(
                f"balance delta account={account_id} bucket={bucket.value} "
                f"delta={-amount}"
            )
            return
        account = self._uow.get_account(account_id)
        if account is None:
            raise NotFoundError("Account", account_id)
        raise InsufficientFundsError(
            account_id=account_id,
            currency=bucket.value,
            available=account.balance_for(bucket),
            requested=amount,
        )

    def record_transaction(
        self,
        transaction_type: TransactionType,
        amount: Decimal,
        currency: Currency,
        description: str | None,
        reference_id: str | None,
        user_id: str,
        account_id: str,
    ) -> Transaction:
        """Append an immutable ledger transaction."""
        transaction = Transaction(
            id=new_id(),
            type=transaction_type,
            amount=amount,
            currency=coerce_currency(currency),
            description=description,
            reference_id=reference_id,
            user_id=user_id,
            account_id=account_id,
            created_at=utc_now(),
        )
        self._uow.add_transaction(transaction)
        self._usage_logger.info(
            f"transaction type={transaction_type.value} amount={amount} "
            f"currency={transaction.currency.value} account={account_id} "
            f"reference={reference_id}"
        )
        return transaction

    def record_change(
        self,
        action: ChangeAction,
        entity_type: EntityType,
        entity_id: str,
        old_value,
        new_value,
        author_id: str,
        **backrefs: str,
    ) -> Change:
        """Append a change-audit row with serialized snapshots.

        Args:
            action: CREATE, UPDATE or DELETE.
            entity_type: Kind of entity mutated.
            entity_id: Identifier of the entity.
            old_value: Entity before the mutation, or None.
            new_value: Entity after the mutation, or None.
            author_id: User performing the mutation.
            **backrefs: Optional ``expense_id``/``income_id``/``loan_id``/
                ``debt_id`` links.
        """
        change = Change(
            id=new_id(),
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            author_id=author_id,
            old_value=serialize_snapshot(old_value),
            new_value=serialize_snapshot(new_value),
            created_at=utc_now(),
            **backrefs,
        )
        self._uow.add_change(change)
        self._usage_logger.info(
            f"change action={action.value} entity={entity_type.value} "
            f"id={entity_id} author={author_id}"
        )
        return change


__all__ = ["LedgerMutationEngine"]
