"""SQLAlchemy-backed repository for ledger mutations.

Each ``unit_of_work()`` block runs inside one ``engine.begin()`` transaction.
Balance deltas are applied in the database (``bucket = bucket + :delta``) so
concurrent updates of the same row serialize on the row lock instead of
racing on a value read into Python.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import asdict
from decimal import Decimal
from enum import Enum

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from household_ledger.application.ports.database import DatabaseEnginePort
from household_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerUnitOfWorkPort,
)
from household_ledger.domain.currency import Currency
from household_ledger.domain.errors import StorageError
from household_ledger.domain.models import (
    Account,
    AccountMember,
    AccountRole,
    Category,
    Change,
    Conversion,
    Debt,
    Expense,
    ExpenseAllocation,
    ExpenseType,
    Income,
    Loan,
    PaymentMethod,
    Transaction,
    Transfer,
    User,
)
from household_ledger.infrastructure.schema import (
    accounts,
    balance_column,
    categories,
    changes,
    conversions,
    debts,
    expense_allocations,
    expenses,
    incomes,
    loans,
    transactions,
    transfers,
    user_accounts,
    users,
)
from household_ledger.utils.decimal_utils import coerce_decimal


def _enum_values(payload: dict) -> dict:
    """Replace enum members by their stored string values."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in payload.items()
    }


def account_from_row(row) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        is_shared=bool(row.is_shared),
        balance_usd_zelle=coerce_decimal(row.balance_usd_zelle),
        balance_usd_efectivo=coerce_decimal(row.balance_usd_efectivo),
        balance_usdt=coerce_decimal(row.balance_usdt),
        balance_cup_efectivo=coerce_decimal(row.balance_cup_efectivo),
        balance_cup_transferencia=coerce_decimal(row.balance_cup_transferencia),
        created_at=row.created_at,
    )


def user_from_row(row) -> User:
    return User(
        id=row.id,
        name=row.name,
        email=row.email,
        income_percentage=coerce_decimal(row.income_percentage),
        monthly_income_usd=coerce_decimal(row.monthly_income_usd),
        monthly_income_usdt=coerce_decimal(row.monthly_income_usdt),
        monthly_income_cup=coerce_decimal(row.monthly_income_cup),
        created_at=row.created_at,
    )


def _expense_from_row(row) -> Expense:
    return Expense(
        id=row.id,
        amount=coerce_decimal(row.amount),
        currency=Currency(row.currency),
        payment_method=PaymentMethod(row.payment_method),
        expense_type=ExpenseType(row.expense_type),
        is_shared=bool(row.is_shared),
        account_id=row.account_id,
        category_id=row.category_id,
        user_id=row.user_id,
        description=row.description,
        planned_date=row.planned_date,
        created_at=row.created_at,
    )


def _income_from_row(row) -> Income:
    return Income(
        id=row.id,
        amount=coerce_decimal(row.amount),
        currency=Currency(row.currency),
        account_id=row.account_id,
        user_id=row.user_id,
        description=row.description,
        converted_to_cup=bool(row.converted_to_cup),
        exchange_rate=(
            coerce_decimal(row.exchange_rate)
            if row.exchange_rate is not None
            else None
        ),
        conversion_id=row.conversion_id,
        created_at=row.created_at,
    )


def _loan_from_row(row) -> Loan:
    return Loan(
        id=row.id,
        amount=coerce_decimal(row.amount),
        currency=Currency(row.currency),
        giver_id=row.giver_id,
        receiver_id=row.receiver_id,
        from_account_id=row.from_account_id,
        to_account_id=row.to_account_id,
        paid_amount=coerce_decimal(row.paid_amount),
        is_paid=bool(row.is_paid),
        description=row.description,
        due_date=row.due_date,
        paid_date=row.paid_date,
        created_at=row.created_at,
    )


def _debt_from_row(row) -> Debt:
    return Debt(
        id=row.id,
        amount=coerce_decimal(row.amount),
        currency=Currency(row.currency),
        creditor=row.creditor,
        account_id=row.account_id,
        user_id=row.user_id,
        paid_amount=coerce_decimal(row.paid_amount),
        is_paid=bool(row.is_paid),
        description=row.description,
        due_date=row.due_date,
        paid_date=row.paid_date,
        created_at=row.created_at,
    )


class SqlAlchemyLedgerUnitOfWork(LedgerUnitOfWorkPort):
    """Unit of work bound to one open SQLAlchemy connection."""

    def __init__(self, conn: Connection) -> None:
        """Initialize the unit of work.

        Args:
            conn: Connection inside an open ``engine.begin()`` block.
        """
        self._conn = conn

    # Accounts and members

    def get_account(
        self,
        account_id: str,
        for_update: bool = False,
    ) -> Account | None:
        query = select(accounts).where(accounts.c.id == account_id)
        if for_update:
            query = query.with_for_update()
        row = self._conn.execute(query).first()
        return account_from_row(row) if row else None

    def lock_accounts(self, account_ids: Sequence[str]) -> dict[str, Account]:
        if not account_ids:
            return {}
        query = (
            select(accounts)
            .where(accounts.c.id.in_(sorted(set(account_ids))))
            .order_by(accounts.c.id)
            .with_for_update()
        )
        rows = self._conn.execute(query).all()
        return {row.id: account_from_row(row) for row in rows}

    def is_account_member(self, account_id: str, user_id: str) -> bool:
        query = select(user_accounts.c.id).where(
            user_accounts.c.account_id == account_id,
            user_accounts.c.user_id == user_id,
        )
        return self._conn.execute(query).first() is not None

    def list_account_members(self, account_id: str) -> list[AccountMember]:
        query = (
            select(users, user_accounts.c.role)
            .join(user_accounts, user_accounts.c.user_id == users.c.id)
            .where(user_accounts.c.account_id == account_id)
            .order_by(user_accounts.c.id)
        )
        rows = self._conn.execute(query).all()
        return [
            AccountMember(
                user=user_from_row(row),
                account_id=account_id,
                role=AccountRole(row.role),
            )
            for row in rows
        ]

    def find_personal_account(self, user_id: str) -> Account | None:
        query = (
            select(accounts)
            .join(user_accounts, user_accounts.c.account_id == accounts.c.id)
            .where(
                user_accounts.c.user_id == user_id,
                user_accounts.c.role == AccountRole.OWNER.value,
                accounts.c.is_shared.is_(False),
            )
            .order_by(accounts.c.created_at, accounts.c.id)
            .limit(1)
        )
        row = self._conn.execute(query).first()
        return account_from_row(row) if row else None

    def get_user(self, user_id: str) -> User | None:
        row = self._conn.execute(
            select(users).where(users.c.id == user_id)
        ).first()
        return user_from_row(row) if row else None

    def apply_balance_delta(
        self,
        account_id: str,
        currency: Currency,
        delta: Decimal,
    ) -> bool:
        column = balance_column(currency)
        result = self._conn.execute(
            update(accounts)
            .where(accounts.c.id == account_id)
            .values({column: column + delta})
        )
        return result.rowcount == 1

    def debit_if_sufficient(
        self,
        account_id: str,
        currency: Currency,
        amount: Decimal,
    ) -> bool:
        column = balance_column(currency)
        result = self._conn.execute(
            update(accounts)
            .where(accounts.c.id == account_id, column >= amount)
            .values({column: column - amount})
        )
        return result.rowcount == 1

    # Audit

    def add_transaction(self, transaction: Transaction) -> None:
        self._conn.execute(
            insert(transactions).values(**_enum_values(asdict(transaction)))
        )

    def add_change(self, change: Change) -> None:
        self._conn.execute(insert(changes).values(**_enum_values(asdict(change))))

    # Expenses

    def add_expense(self, expense: Expense) -> None:
        self._conn.execute(insert(expenses).values(**_enum_values(asdict(expense))))

    def get_expense(
        self,
        expense_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> Expense | None:
        query = select(expenses).where(
            expenses.c.id == expense_id,
            expenses.c.user_id == user_id,
        )
        if for_update:
            query = query.with_for_update()
        row = self._conn.execute(query).first()
        return _expense_from_row(row) if row else None

    def update_expense(self, expense: Expense) -> None:
        values = _enum_values(asdict(expense))
        values.pop("id")
        self._conn.execute(
            update(expenses).where(expenses.c.id == expense.id).values(**values)
        )

    def delete_expense(self, expense_id: str) -> None:
        self._conn.execute(delete(expenses).where(expenses.c.id == expense_id))

    def add_expense_allocations(
        self,
        allocations: Sequence[ExpenseAllocation],
    ) -> None:
        if not allocations:
            return
        self._conn.execute(
            insert(expense_allocations),
            [asdict(allocation) for allocation in allocations],
        )

    def list_expense_allocations(self, expense_id: str) -> list[ExpenseAllocation]:
        query = (
            select(expense_allocations)
            .where(expense_allocations.c.expense_id == expense_id)
            .order_by(expense_allocations.c.id)
        )
        return [
            ExpenseAllocation(
                expense_id=row.expense_id,
                user_id=row.user_id,
                account_id=row.account_id,
                amount=coerce_decimal(row.amount),
                percentage=coerce_decimal(row.percentage),
            )
            for row in self._conn.execute(query).all()
        ]

    def delete_expense_allocations(self, expense_id: str) -> None:
        self._conn.execute(
            delete(expense_allocations).where(
                expense_allocations.c.expense_id == expense_id
            )
        )

    # Incomes

    def add_income(self, income: Income) -> None:
        self._conn.execute(insert(incomes).values(**_enum_values(asdict(income))))

    def get_income(
        self,
        income_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> Income | None:
        query = select(incomes).where(
            incomes.c.id == income_id,
            incomes.c.user_id == user_id,
        )
        if for_update:
            query = query.with_for_update()
        row = self._conn.execute(query).first()
        return _income_from_row(row) if row else None

    def update_income(self, income: Income) -> None:
        values = _enum_values(asdict(income))
        values.pop("id")
        self._conn.execute(
            update(incomes).where(incomes.c.id == income.id).values(**values)
        )

    def delete_income(self, income_id: str) -> None:
        self._conn.execute(delete(incomes).where(incomes.c.id == income_id))

    # Conversions and transfers

    def add_conversion(self, conversion: Conversion) -> None:
        self._conn.execute(
            insert(conversions).values(**_enum_values(asdict(conversion)))
        )

    def add_transfer(self, transfer: Transfer) -> None:
        self._conn.execute(
            insert(transfers).values(**_enum_values(asdict(transfer)))
        )

    # Loans

    def add_loan(self, loan: Loan) -> None:
        self._conn.execute(insert(loans).values(**_enum_values(asdict(loan))))

    def get_loan(self, loan_id: str, for_update: bool = False) -> Loan | None:
        query = select(loans).where(loans.c.id == loan_id)
        if for_update:
            query = query.with_for_update()
        row = self._conn.execute(query).first()
        return _loan_from_row(row) if row else None

    def update_loan(self, loan: Loan) -> None:
        values = _enum_values(asdict(loan))
        values.pop("id")
        self._conn.execute(
            update(loans).where(loans.c.id == loan.id).values(**values)
        )

    def delete_loan(self, loan_id: str) -> None:
        self._conn.execute(delete(loans).where(loans.c.id == loan_id))

    def list_pending_loans_to_account(
        self,
        account_id: str,
        currencies: Sequence[Currency],
        personal_origin_only: bool = False,
    ) -> list[Loan]:
        origin = accounts.alias("origin")
        # created_at carries microseconds; id only orders loans created in
        # the same instant, which concurrent requests can produce.
        query = (
            select(loans)
            .join(origin, origin.c.id == loans.c.from_account_id)
            .where(
                loans.c.to_account_id == account_id,
                loans.c.is_paid.is_(False),
                loans.c.currency.in_([currency.value for currency in currencies]),
            )
            .order_by(loans.c.created_at.asc(), loans.c.id.asc())
            .with_for_update(of=loans)
        )
        if personal_origin_only:
            query = query.where(origin.c.is_shared.is_(False))
        rows = self._conn.execute(query).all()
        return [_loan_from_row(row) for row in rows]

    # Debts

    def add_debt(self, debt: Debt) -> None:
        self._conn.execute(insert(debts).values(**_enum_values(asdict(debt))))

    def get_debt(
        self,
        debt_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> Debt | None:
        query = select(debts).where(
            debts.c.id == debt_id,
            debts.c.user_id == user_id,
        )
        if for_update:
            query = query.with_for_update()
        row = self._conn.execute(query).first()
        return _debt_from_row(row) if row else None

    def update_debt(self, debt: Debt) -> None:
        values = _enum_values(asdict(debt))
        values.pop("id")
        self._conn.execute(
            update(debts).where(debts.c.id == debt.id).values(**values)
        )

    def delete_debt(self, debt_id: str) -> None:
        self._conn.execute(delete(debts).where(debts.c.id == debt_id))

    # Household setup

    def add_user(self, user: User) -> None:
        self._conn.execute(insert(users).values(**asdict(user)))

    def add_account(self, account: Account) -> None:
        self._conn.execute(insert(accounts).values(**asdict(account)))

    def add_account_member(
        self,
        account_id: str,
        user_id: str,
        role: AccountRole,
    ) -> None:
        self._conn.execute(
            insert(user_accounts).values(
                account_id=account_id,
                user_id=user_id,
                role=role.value,
            )
        )

    def add_category(self, category: Category) -> None:
        self._conn.execute(insert(categories).values(**asdict(category)))

    def get_category(self, category_id: str) -> Category | None:
        row = self._conn.execute(
            select(categories).where(categories.c.id == category_id)
        ).first()
        if not row:
            return None
        return Category(id=row.id, name=row.name, color=row.color)


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository opening SQLAlchemy transactions on the ledger engine."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    @contextmanager
    def unit_of_work(self) -> Iterator[SqlAlchemyLedgerUnitOfWork]:
        """Yield a unit of work committed on exit and rolled back on error.

        Raises:
            StorageError: If the database fails; nothing is committed.
        """
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                yield SqlAlchemyLedgerUnitOfWork(conn)
        except SQLAlchemyError as exc:
            raise StorageError(f"Ledger storage failure: {exc}") from exc


__all__ = [
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyLedgerUnitOfWork",
    "account_from_row",
    "user_from_row",
]
