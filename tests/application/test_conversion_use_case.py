"""Tests for the conversion use case."""

from decimal import Decimal

import pytest

from household_ledger.application.use_cases.conversions import (
    CreateConversionUseCase,
)
from household_ledger.application.use_cases.incomes import (
    DeleteIncomeUseCase,
    UpdateIncomeUseCase,
)
from household_ledger.application.use_cases.loans import CreateLoanUseCase
from household_ledger.domain.currency import Currency
from household_ledger.domain.errors import NotFoundError, ValidationError
from household_ledger.domain.models import Account, AccountRole
from household_ledger.domain.models.commands import (
    CreateConversionCommand,
    CreateLoanCommand,
    UpdateIncomeCommand,
)
from household_ledger.infrastructure.schema import (
    changes,
    conversions,
    incomes,
    loans,
    transactions,
)
from household_ledger.utils.utils import new_id, utc_now


def test_conversion_within_one_account(household, build, fund, balance, rows):
    """Value leaves one bucket and arrives in another at the exchange rate."""
    ana = household.user_ids[0]
    account_id = household.personal_account_ids[ana]
    fund(account_id, Currency.USD_EFECTIVO, 100)

    conversion = build(CreateConversionUseCase).execute(
        ana,
        CreateConversionCommand(
            from_amount="50",
            from_currency="USD_EFECTIVO",
            to_currency="CUP_EFECTIVO",
            exchange_rate="320",
            from_account_id=account_id,
        ),
    )

    assert conversion.to_account_id == account_id
    assert conversion.to_amount == conversion.from_amount * conversion.exchange_rate
    assert balance(account_id, Currency.USD_EFECTIVO) == Decimal("50")
    assert balance(account_id, Currency.CUP_EFECTIVO) == Decimal("16000")
    recorded = rows(transactions, reference_id=conversion.id)
    assert [r.type for r in recorded] == ["CONVERSION"]
    assert recorded[0].description == "Converted 50 USD_EFECTIVO to 16000.00 CUP_EFECTIVO"
    assert rows(changes) == []
    assert rows(incomes) == []


def test_cup_conversion_into_shared_account_books_income_and_sweeps(
    household, repository, build, balance, rows
):
    """Only loans coming from personal accounts are repaid by the sweep."""
    ana, ben = household.user_ids
    ana_personal = household.personal_account_ids[ana]
    shared = household.shared_account_id
    other_shared = Account(id=new_id(), name="Viaje", is_shared=True, created_at=utc_now())
    with repository.unit_of_work() as uow:
        uow.add_account(other_shared)
        uow.add_account_member(other_shared.id, ana, AccountRole.OWNER)
    create_loan = build(CreateLoanUseCase)
    shared_origin = create_loan.execute(
        ana,
        CreateLoanCommand(
            amount="1000",
            currency="CUP_TRANSFERENCIA",
            receiver_id=ben,
            from_account_id=other_shared.id,
            to_account_id=shared,
        ),
    )
    personal_origin = create_loan.execute(
        ana,
        CreateLoanCommand(
            amount="5000",
            currency="CUP_TRANSFERENCIA",
            receiver_id=ben,
            from_account_id=ana_personal,
            to_account_id=shared,
        ),
    )

    build(CreateConversionUseCase).execute(
        ana,
        CreateConversionCommand(
            from_amount="100",
            from_currency="USD_ZELLE",
            to_currency="CUP_TRANSFERENCIA",
            exchange_rate="300",
            from_account_id=ana_personal,
            to_account_id=shared,
        ),
    )

    income_rows = rows(incomes)
    assert len(income_rows) == 1
    assert income_rows[0].account_id == shared
    assert Decimal(income_rows[0].amount) == Decimal("30000")
    assert income_rows[0].description == "Conversion from Personal Ana"
    assert income_rows[0].conversion_id == rows(conversions)[0].id
    loan_rows = {row.id: row for row in rows(loans)}
    assert loan_rows[personal_origin.id].is_paid is True
    assert loan_rows[shared_origin.id].is_paid is False
    assert balance(ana_personal, Currency.USD_ZELLE) == Decimal("-100")
    assert balance(ana_personal, Currency.CUP_TRANSFERENCIA) == Decimal("0")
    assert balance(shared, Currency.CUP_TRANSFERENCIA) == Decimal("31000")
    assert len(rows(transactions, type="INCOME")) == 1
    assert len(rows(transactions, type="LOAN_PAYMENT")) == 1


def test_income_booked_by_a_conversion_cannot_be_changed(
    household, build, fund, balance, rows
):
    """Removing the booked income alone would lose the converted value."""
    ana = household.user_ids[0]
    ana_personal = household.personal_account_ids[ana]
    shared = household.shared_account_id
    fund(ana_personal, Currency.USD_ZELLE, 100)
    conversion = build(CreateConversionUseCase).execute(
        ana,
        CreateConversionCommand(
            from_amount="100",
            from_currency="USD_ZELLE",
            to_currency="CUP_TRANSFERENCIA",
            exchange_rate="300",
            from_account_id=ana_personal,
            to_account_id=shared,
        ),
    )
    income_id = rows(incomes, conversion_id=conversion.id)[0].id

    with pytest.raises(ValidationError) as exc_info:
        build(DeleteIncomeUseCase).execute(ana, income_id)
    assert exc_info.value.field == "income_id"
    with pytest.raises(ValidationError):
        build(UpdateIncomeUseCase).execute(
            ana, UpdateIncomeCommand(income_id=income_id, amount="1")
        )

    assert len(rows(incomes)) == 1
    assert balance(ana_personal, Currency.USD_ZELLE) == Decimal("0")
    assert balance(shared, Currency.CUP_TRANSFERENCIA) == Decimal("30000")


def test_conversion_inside_shared_account_skips_income_chain(
    household, build, balance, rows
):
    ana = household.user_ids[0]
    shared = household.shared_account_id

    build(CreateConversionUseCase).execute(
        ana,
        CreateConversionCommand(
            from_amount="10",
            from_currency="USDT",
            to_currency="CUP_EFECTIVO",
            exchange_rate="330",
            from_account_id=shared,
        ),
    )

    assert balance(shared, Currency.CUP_EFECTIVO) == Decimal("3300")
    assert balance(shared, Currency.USDT) == Decimal("-10")
    assert rows(incomes) == []
    assert len(rows(conversions)) == 1


def test_same_bucket_on_same_account_is_rejected(household, build):
    ana = household.user_ids[0]

    with pytest.raises(ValidationError):
        build(CreateConversionUseCase).execute(
            ana,
            CreateConversionCommand(
                from_amount="10",
                from_currency="USDT",
                to_currency="USDT",
                exchange_rate="1",
                from_account_id=household.personal_account_ids[ana],
            ),
        )


def test_missing_target_account_aborts_without_mutation(household, build, balance, rows):
    ana = household.user_ids[0]
    account_id = household.personal_account_ids[ana]

    with pytest.raises(NotFoundError):
        build(CreateConversionUseCase).execute(
            ana,
            CreateConversionCommand(
                from_amount="10",
                from_currency="USDT",
                to_currency="CUP_EFECTIVO",
                exchange_rate="300",
                from_account_id=account_id,
                to_account_id="missing",
            ),
        )

    assert balance(account_id, Currency.USDT) == Decimal("0")
    assert rows(conversions) == []
