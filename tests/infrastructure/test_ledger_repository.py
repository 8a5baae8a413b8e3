"""Tests for the SQLAlchemy ledger repository."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import text

from household_ledger.application.use_cases.expenses import CreateExpenseUseCase
from household_ledger.domain.currency import CUP_BUCKETS, Currency
from household_ledger.domain.errors import StorageError
from household_ledger.domain.models import Account, AccountRole, Loan
from household_ledger.domain.models.commands import CreateExpenseCommand
from household_ledger.utils.utils import new_id, utc_now


def _loan(household, from_account_id, currency, created_at, **overrides) -> Loan:
    ana, ben = household.user_ids
    fields = {
        "id": new_id(),
        "amount": Decimal("100"),
        "currency": currency,
        "giver_id": ana,
        "receiver_id": ben,
        "from_account_id": from_account_id,
        "to_account_id": household.shared_account_id,
        "created_at": created_at,
    }
    fields.update(overrides)
    return Loan(**fields)


def test_pending_loans_are_unpaid_cup_loans_oldest_first(household, repository):
    """Paid loans, other buckets and other targets are excluded."""
    ana = household.user_ids[0]
    personal = household.personal_account_ids[ana]
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    newer = _loan(household, personal, Currency.CUP_EFECTIVO, base + timedelta(days=2))
    older = _loan(household, personal, Currency.CUP_TRANSFERENCIA, base)
    paid = _loan(
        household, personal, Currency.CUP_EFECTIVO, base, is_paid=True,
        paid_amount=Decimal("100"),
    )
    usd = _loan(household, personal, Currency.USD_ZELLE, base)
    elsewhere = _loan(
        household, personal, Currency.CUP_EFECTIVO, base, to_account_id=personal
    )
    with repository.unit_of_work() as uow:
        for loan in (newer, older, paid, usd, elsewhere):
            uow.add_loan(loan)

    with repository.unit_of_work() as uow:
        pending = uow.list_pending_loans_to_account(
            household.shared_account_id, CUP_BUCKETS
        )

    assert [loan.id for loan in pending] == [older.id, newer.id]
    assert pending[0].amount == Decimal("100")
    assert pending[0].currency is Currency.CUP_TRANSFERENCIA


def test_personal_origin_filter_skips_shared_lenders(household, repository):
    ana = household.user_ids[0]
    trip = Account(id=new_id(), name="Viaje", is_shared=True, created_at=utc_now())
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    from_trip = _loan(household, trip.id, Currency.CUP_EFECTIVO, base)
    from_personal = _loan(
        household,
        household.personal_account_ids[ana],
        Currency.CUP_EFECTIVO,
        base + timedelta(hours=1),
    )
    with repository.unit_of_work() as uow:
        uow.add_account(trip)
        uow.add_account_member(trip.id, ana, AccountRole.OWNER)
        uow.add_loan(from_trip)
        uow.add_loan(from_personal)

    with repository.unit_of_work() as uow:
        every = uow.list_pending_loans_to_account(
            household.shared_account_id, CUP_BUCKETS
        )
        personal_only = uow.list_pending_loans_to_account(
            household.shared_account_id, CUP_BUCKETS, personal_origin_only=True
        )

    assert [loan.id for loan in every] == [from_trip.id, from_personal.id]
    assert [loan.id for loan in personal_only] == [from_personal.id]


def test_loans_sharing_a_timestamp_are_ordered_by_id(household, repository):
    """Loans created in the same instant keep a stable order between sweeps."""
    personal = household.personal_account_ids[household.user_ids[0]]
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    later = _loan(household, personal, Currency.CUP_EFECTIVO, base, id="b" * 32)
    earlier = _loan(household, personal, Currency.CUP_EFECTIVO, base, id="a" * 32)
    oldest = _loan(
        household, personal, Currency.CUP_EFECTIVO, base - timedelta(seconds=1),
        id="c" * 32,
    )
    with repository.unit_of_work() as uow:
        for loan in (later, earlier, oldest):
            uow.add_loan(loan)

    with repository.unit_of_work() as uow:
        pending = uow.list_pending_loans_to_account(
            household.shared_account_id, CUP_BUCKETS
        )

    assert [loan.id for loan in pending] == [oldest.id, earlier.id, later.id]


def test_lock_accounts_returns_existing_accounts_by_id(household, repository):
    ana, ben = household.user_ids
    wanted = [
        household.personal_account_ids[ben],
        household.shared_account_id,
        household.personal_account_ids[ana],
        household.shared_account_id,
        "missing",
    ]

    with repository.unit_of_work() as uow:
        locked = uow.lock_accounts(wanted)
        assert uow.lock_accounts([]) == {}

    assert sorted(locked) == sorted(set(wanted) - {"missing"})
    assert locked[household.shared_account_id].is_shared is True


def test_expense_allocations_are_stored_per_expense(household, repository, build):
    ana, ben = household.user_ids
    expense = build(CreateExpenseUseCase).execute(
        ana,
        CreateExpenseCommand(
            amount="80",
            currency="USD_ZELLE",
            payment_method="CASH",
            account_id=household.shared_account_id,
            category_id=household.category_ids["Comida"],
            is_shared=True,
        ),
    )

    with repository.unit_of_work() as uow:
        stored = uow.list_expense_allocations(expense.id)
        uow.delete_expense_allocations(expense.id)
        assert uow.list_expense_allocations(expense.id) == []

    assert [(a.user_id, a.account_id, a.amount) for a in stored] == [
        (ana, household.personal_account_ids[ana], Decimal("60")),
        (ben, household.personal_account_ids[ben], Decimal("20")),
    ]
    assert stored[0].percentage == Decimal("75")


def test_debit_if_sufficient_is_conditional(household, repository, fund, balance):
    account_id = household.shared_account_id
    fund(account_id, Currency.USDT, 10)

    with repository.unit_of_work() as uow:
        assert uow.debit_if_sufficient(account_id, Currency.USDT, Decimal("11")) is False
        assert uow.debit_if_sufficient(account_id, Currency.USDT, Decimal("10")) is True
        assert uow.apply_balance_delta("missing", Currency.USDT, Decimal("1")) is False

    assert balance(account_id, Currency.USDT) == Decimal("0")


def test_database_errors_surface_as_storage_error(household, repository):
    """SQLAlchemy failures are rolled back and re-raised as StorageError."""
    with pytest.raises(StorageError):
        with repository.unit_of_work() as uow:
            uow.add_user(
                uow.get_user(household.user_ids[0])
            )


def test_failed_unit_of_work_commits_nothing(household, repository, engine, balance):
    account_id = household.shared_account_id

    with pytest.raises(RuntimeError):
        with repository.unit_of_work() as uow:
            uow.apply_balance_delta(account_id, Currency.USDT, Decimal("5"))
            raise RuntimeError("boom")

    assert balance(account_id, Currency.USDT) == Decimal("0")
    with engine.connect() as conn:
        assert conn.execute(text("SELECT count(*) FROM transactions")).scalar() == 0
