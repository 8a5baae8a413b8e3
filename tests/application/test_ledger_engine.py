"""Tests for the ledger mutation engine and unit-of-work atomicity."""

import json
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from household_ledger.application.use_cases.expenses import CreateExpenseUseCase
from household_ledger.application.use_cases.ledger_engine import (
    LedgerMutationEngine,
)
from household_ledger.domain.currency import Currency
from household_ledger.domain.errors import (
    InsufficientFundsError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from household_ledger.domain.models import ChangeAction, EntityType, TransactionType
from household_ledger.domain.models.commands import CreateExpenseCommand
from household_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerUnitOfWork,
)
from household_ledger.infrastructure.schema import changes, expenses, transactions


def test_balance_delta_touches_only_the_named_bucket(household, repository, balance):
    account_id = household.shared_account_id
    usage_logger = MagicMock()

    with repository.unit_of_work() as uow:
        engine = LedgerMutationEngine(uow, usage_logger=usage_logger)
        engine.apply_balance_delta(account_id, Currency.CUP_EFECTIVO, Decimal("250"))
        engine.apply_balance_delta(account_id, Currency.CUP_EFECTIVO, Decimal("-300"))

    assert balance(account_id, Currency.CUP_EFECTIVO) == Decimal("-50")
    assert balance(account_id, Currency.CUP_TRANSFERENCIA) == Decimal("0")
    assert usage_logger.info.call_count == 2


def test_balance_delta_on_missing_account_is_not_found(repository, household):
    with pytest.raises(NotFoundError):
        with repository.unit_of_work() as uow:
            LedgerMutationEngine(uow, usage_logger=MagicMock()).apply_balance_delta(
                "missing", Currency.USDT, Decimal("1")
            )


def test_balance_delta_rejects_unknown_bucket(repository, household):
    with pytest.raises(ValidationError):
        with repository.unit_of_work() as uow:
            LedgerMutationEngine(uow, usage_logger=MagicMock()).apply_balance_delta(
                household.shared_account_id, "USD", Decimal("1")
            )


def test_funds_checked_debit(household, repository, fund, balance):
    account_id = household.shared_account_id
    fund(account_id, Currency.USDT, 10)

    with repository.unit_of_work() as uow:
        LedgerMutationEngine(uow, usage_logger=MagicMock()).debit_with_funds_check(
            account_id, Currency.USDT, Decimal("4")
        )
    with pytest.raises(InsufficientFundsError):
        with repository.unit_of_work() as uow:
            LedgerMutationEngine(uow, usage_logger=MagicMock()).debit_with_funds_check(
                account_id, Currency.USDT, Decimal("7")
            )

    assert balance(account_id, Currency.USDT) == Decimal("6")


def test_audit_rows_are_appended(household, repository, rows):
    ana = household.user_ids[0]

    with repository.unit_of_work() as uow:
        engine = LedgerMutationEngine(uow, usage_logger=MagicMock())
        transaction = engine.record_transaction(
            TransactionType.INCOME,
            Decimal("5"),
            Currency.USDT,
            "Gift",
            "ref-1",
            ana,
            household.shared_account_id,
        )
        change = engine.record_change(
            ChangeAction.UPDATE,
            EntityType.DEBT,
            "debt-1",
            {"paid_amount": Decimal("1")},
            {"paid_amount": Decimal("2")},
            ana,
            debt_id="debt-1",
        )

    stored = rows(transactions, id=transaction.id)[0]
    assert stored.reference_id == "ref-1"
    assert stored.currency == "USDT"
    audit = rows(changes, id=change.id)[0]
    assert audit.debt_id == "debt-1"
    assert json.loads(audit.old_value) == {"paid_amount": "1"}
    assert json.loads(audit.new_value) == {"paid_amount": "2"}


def test_storage_failure_rolls_back_the_whole_event(
    household, build, fund, balance, rows, monkeypatch
):
    """A failure on the last write leaves balances and audit rows untouched."""
    ana = household.user_ids[0]
    account_id = household.personal_account_ids[ana]
    fund(account_id, Currency.USD_ZELLE, 100)

    def _broken_add_change(self, change):
        raise OperationalError("INSERT INTO changes", {}, Exception("disk full"))

    monkeypatch.setattr(SqlAlchemyLedgerUnitOfWork, "add_change", _broken_add_change)

    with pytest.raises(StorageError) as exc_info:
        build(CreateExpenseUseCase).execute(
            ana,
            CreateExpenseCommand(
                amount="40",
                currency="USD_ZELLE",
                payment_method="CASH",
                account_id=account_id,
                category_id=household.category_ids["Casa"],
            ),
        )

    assert exc_info.value.code == "storage_error"
    assert balance(account_id, Currency.USD_ZELLE) == Decimal("100")
    assert rows(expenses) == []
    assert rows(transactions) == []
