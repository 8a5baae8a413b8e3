"""Shared fixtures: a seeded household ledger on a throwaway SQLite file."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, select

from household_ledger.application.use_cases.seed_household import (
    SeedHouseholdUseCase,
)
from household_ledger.domain.currency import Currency
from household_ledger.infrastructure.db import create_schema
from household_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)


class SqliteDatabaseAdapter:
    """DatabaseEnginePort serving a pre-built engine."""

    def __init__(self, engine) -> None:
        self._engine = engine

    def get_ledger_engine(self):
        return self._engine


@pytest.fixture
def engine(tmp_path):
    """Engine on a fresh SQLite file holding the ledger schema."""
    ledger_engine = create_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    create_schema(ledger_engine)
    yield ledger_engine
    ledger_engine.dispose()


@pytest.fixture
def db_port(engine):
    return SqliteDatabaseAdapter(engine)


@pytest.fixture
def repository(db_port):
    return SqlAlchemyLedgerRepository(db_port)


@pytest.fixture
def household(repository):
    """Two members (Ana 600 USD / 60 %, Ben 200 USD / 40 %) and their accounts."""
    return SeedHouseholdUseCase(repository, logger=MagicMock()).run()


@pytest.fixture
def build(repository):
    """Instantiate a ledger use case with silent loggers."""

    def _build(use_case_cls, **kwargs):
        return use_case_cls(
            repository,
            logger=MagicMock(),
            usage_logger=MagicMock(),
            **kwargs,
        )

    return _build


@pytest.fixture
def fund(repository):
    """Add an opening amount to one bucket of an account."""

    def _fund(account_id: str, currency: Currency, amount) -> None:
        with repository.unit_of_work() as uow:
            uow.apply_balance_delta(account_id, currency, Decimal(str(amount)))

    return _fund


@pytest.fixture
def balance(repository):
    """Read the current balance of one bucket of an account."""

    def _balance(account_id: str, currency: Currency) -> Decimal:
        with repository.unit_of_work() as uow:
            return uow.get_account(account_id).balance_for(currency)

    return _balance


@pytest.fixture
def rows(engine):
    """Return every row of a table, optionally filtered by column values."""

    def _rows(table, **filters):
        query = select(table)
        for column, value in filters.items():
            query = query.where(table.c[column] == value)
        with engine.connect() as conn:
            return conn.execute(query).all()

    return _rows
