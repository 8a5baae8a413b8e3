"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort, LedgerUnitOfWorkPort
from .statistics_repository import StatisticsRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
    "LedgerUnitOfWorkPort",
    "StatisticsRepositoryPort",
]
