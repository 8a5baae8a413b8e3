"""Use case to compute the reporting view of a user's ledger."""

from datetime import datetime

from household_ledger.application.ports.statistics_repository import (
    StatisticsRepositoryPort,
)
from household_ledger.domain.models import LedgerStatistics
from household_ledger.domain.services.statistics import compute_statistics
from household_ledger.infrastructure.logging.logger import get_app_logger


class GetStatisticsUseCase:
    """Aggregate realized expenses, incomes and available balances."""

    def __init__(
        self,
        statistics_repository: StatisticsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            statistics_repository: Port providing the reporting rows.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._statistics_repository = statistics_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> LedgerStatistics:
        """Return the statistics of a user.

        Args:
            user_id: User whose records are aggregated.
            start: Optional inclusive lower bound on ``created_at``.
            end: Optional inclusive upper bound on ``created_at``.

        Returns:
            LedgerStatistics: Totals per currency family, breakdowns by
            payment method, category and month, and available balances.
        """
        expenses = self._statistics_repository.fetch_realized_expenses(
            user_id, start, end
        )
        incomes = self._statistics_repository.fetch_incomes(user_id, start, end)
        accounts = self._statistics_repository.fetch_member_accounts(user_id)
        self._logger.info(
            f"Statistics for {user_id}: {len(expenses)} expenses, "
            f"{len(incomes)} incomes, {len(accounts)} accounts"
        )
        return compute_statistics(expenses, incomes, accounts)


__all__ = ["GetStatisticsUseCase"]
