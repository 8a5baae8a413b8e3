"""Composition root for wiring infrastructure adapters."""

from dataclasses import dataclass

from household_ledger.application.ports.database import DatabaseEnginePort
from household_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from household_ledger.application.ports.statistics_repository import (
    StatisticsRepositoryPort,
)
from household_ledger.application.use_cases import (
    CreateConversionUseCase,
    CreateDebtUseCase,
    CreateExpenseUseCase,
    CreateIncomeUseCase,
    CreateLoanUseCase,
    CreateTransferUseCase,
    DeleteDebtUseCase,
    DeleteExpenseUseCase,
    DeleteIncomeUseCase,
    DeleteLoanUseCase,
    GetStatisticsUseCase,
    PayDebtUseCase,
    PayLoanUseCase,
    UpdateExpenseUseCase,
    UpdateIncomeUseCase,
)
from household_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from household_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from household_ledger.infrastructure.logging.logger import get_app_logger
from household_ledger.infrastructure.settings import LedgerSettings
from household_ledger.infrastructure.statistics_repository import (
    SqlAlchemyStatisticsRepository,
)


@dataclass(frozen=True)
class LedgerUseCases:
    """Every ledger entry point, wired against one repository."""

    create_expense: CreateExpenseUseCase
    update_expense: UpdateExpenseUseCase
    delete_expense: DeleteExpenseUseCase
    create_income: CreateIncomeUseCase
    update_income: UpdateIncomeUseCase
    delete_income: DeleteIncomeUseCase
    create_conversion: CreateConversionUseCase
    create_loan: CreateLoanUseCase
    pay_loan: PayLoanUseCase
    delete_loan: DeleteLoanUseCase
    create_debt: CreateDebtUseCase
    pay_debt: PayDebtUseCase
    delete_debt: DeleteDebtUseCase
    create_transfer: CreateTransferUseCase
    get_statistics: GetStatisticsUseCase


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the transactional ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db)


def build_statistics_repository(
    db_port: DatabaseEnginePort | None = None,
) -> StatisticsRepositoryPort:
    """Return the read-only statistics repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyStatisticsRepository(resolved_db)


def build_ledger_use_cases(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerUseCases:
    """Return every ledger use case sharing one repository and logger."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or LedgerSettings.from_env()
    repository = build_ledger_repository(resolved_db)
    logger = get_app_logger()
    return LedgerUseCases(
        create_expense=CreateExpenseUseCase(repository, logger=logger),
        update_expense=UpdateExpenseUseCase(repository, logger=logger),
        delete_expense=DeleteExpenseUseCase(repository, logger=logger),
        create_income=CreateIncomeUseCase(
            repository,
            principal_account_id=resolved_settings.principal_account_id,
            logger=logger,
        ),
        update_income=UpdateIncomeUseCase(repository, logger=logger),
        delete_income=DeleteIncomeUseCase(repository, logger=logger),
        create_conversion=CreateConversionUseCase(repository, logger=logger),
        create_loan=CreateLoanUseCase(repository, logger=logger),
        pay_loan=PayLoanUseCase(repository, logger=logger),
        delete_loan=DeleteLoanUseCase(repository, logger=logger),
        create_debt=CreateDebtUseCase(repository, logger=logger),
        pay_debt=PayDebtUseCase(repository, logger=logger),
        delete_debt=DeleteDebtUseCase(repository, logger=logger),
        create_transfer=CreateTransferUseCase(repository, logger=logger),
        get_statistics=GetStatisticsUseCase(
            build_statistics_repository(resolved_db),
            logger=logger,
        ),
    )


__all__ = [
    "LedgerUseCases",
    "build_database_adapter",
    "build_ledger_repository",
    "build_statistics_repository",
    "build_ledger_use_cases",
]
