"""Tests for the debt use cases."""

from decimal import Decimal

import pytest

from household_ledger.application.use_cases.debts import (
    CreateDebtUseCase,
    DeleteDebtUseCase,
    PayDebtUseCase,
)
from household_ledger.domain.currency import Currency
from household_ledger.domain.errors import NotFoundError, ValidationError
from household_ledger.domain.models.commands import CreateDebtCommand, PayDebtCommand
from household_ledger.infrastructure.schema import debts, transactions


@pytest.fixture
def debt_setup(household, build):
    ana = household.user_ids[0]
    account_id = household.personal_account_ids[ana]
    debt = build(CreateDebtUseCase).execute(
        ana,
        CreateDebtCommand(
            amount="50", currency="USDT", creditor="Bank", account_id=account_id
        ),
    )
    return {"ana": ana, "ben": household.user_ids[1], "account": account_id, "debt": debt}


def test_create_debt_takes_amount_and_records_negative_transaction(
    debt_setup, balance, rows
):
    """Debts may overdraw; the DEBT transaction carries a negative amount."""
    debt = debt_setup["debt"]

    assert balance(debt_setup["account"], Currency.USDT) == Decimal("-50")
    recorded = rows(transactions, reference_id=debt.id)
    assert len(recorded) == 1
    assert recorded[0].type == "DEBT"
    assert Decimal(recorded[0].amount) == Decimal("-50")
    assert recorded[0].description == "Debt to Bank"


def test_payment_updates_paid_amount_without_moving_money(
    debt_setup, build, balance, rows
):
    debt = debt_setup["debt"]

    updated = build(PayDebtUseCase).execute(
        debt_setup["ana"], PayDebtCommand(debt_id=debt.id, payment_amount="20")
    )

    assert updated.paid_amount == Decimal("20")
    assert updated.is_paid is False
    assert balance(debt_setup["account"], Currency.USDT) == Decimal("-50")
    payments = rows(transactions, type="DEBT_PAYMENT")
    assert len(payments) == 1
    assert Decimal(payments[0].amount) == Decimal("20")
    assert payments[0].description == "Debt payment to Bank"


def test_full_payment_marks_debt_paid(debt_setup, build):
    pay = build(PayDebtUseCase)
    debt = debt_setup["debt"]

    updated = pay.execute(
        debt_setup["ana"], PayDebtCommand(debt_id=debt.id, payment_amount="50")
    )

    assert updated.is_paid is True
    assert updated.paid_date is not None
    with pytest.raises(ValidationError):
        pay.execute(debt_setup["ana"], PayDebtCommand(debt_id=debt.id, payment_amount="1"))


def test_delete_unpaid_debt_restores_outstanding(debt_setup, build, balance, rows):
    debt = debt_setup["debt"]
    build(PayDebtUseCase).execute(
        debt_setup["ana"], PayDebtCommand(debt_id=debt.id, payment_amount="20")
    )

    build(DeleteDebtUseCase).execute(debt_setup["ana"], debt.id)

    assert balance(debt_setup["account"], Currency.USDT) == Decimal("-20")
    assert rows(debts) == []


def test_debt_of_another_user_is_not_found(debt_setup, build):
    with pytest.raises(NotFoundError):
        build(PayDebtUseCase).execute(
            debt_setup["ben"],
            PayDebtCommand(debt_id=debt_setup["debt"].id, payment_amount="5"),
        )


def test_creditor_is_required(household, build):
    ana = household.user_ids[0]

    with pytest.raises(ValidationError) as exc_info:
        build(CreateDebtUseCase).execute(
            ana,
            CreateDebtCommand(
                amount="5",
                currency="USDT",
                creditor=" ",
                account_id=household.personal_account_ids[ana],
            ),
        )

    assert exc_info.value.field == "creditor"
