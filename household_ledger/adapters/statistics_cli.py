"""CLI adapter printing the statistics of one user as JSON."""

from datetime import datetime
import json
import os

from household_ledger.application.use_cases.get_statistics import (
    GetStatisticsUseCase,
)
from household_ledger.domain.models import LedgerStatistics
from household_ledger.infrastructure.container import (
    build_database_adapter,
    build_statistics_repository,
)
from household_ledger.infrastructure.logging.logger import get_app_logger


def _parse_datetime(value: str | None, logger) -> datetime | None:
    """Parse an ISO date or datetime string.

    Args:
        value: String in YYYY-MM-DD or full ISO 8601 format.
        logger: Logger used for warnings.

    Returns:
        datetime | None: Parsed value or None when invalid.
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def statistics_to_dict(statistics: LedgerStatistics) -> dict:
    """Return a JSON-ready view of the statistics, amounts as strings."""

    def _families(totals) -> dict[str, str]:
        return {key: str(value) for key, value in totals.as_dict().items()}

    def _grouped(groups) -> dict[str, dict[str, str]]:
        return {key: _families(value) for key, value in groups.items()}

    return {
        "expenses": _families(statistics.expenses),
        "incomes": _families(statistics.incomes),
        "balance": _families(statistics.balance),
        "by_payment_method": _grouped(statistics.by_payment_method),
        "by_category": _grouped(statistics.by_category),
        "monthly_expenses": _grouped(statistics.monthly_expenses),
        "monthly_incomes": _grouped(statistics.monthly_incomes),
        "available": {
            currency.value: str(amount)
            for currency, amount in statistics.available.items()
        },
    }


def main() -> None:
    """Print the statistics of ``LEDGER_STATS_USER_ID``."""
    logger = get_app_logger()
    user_id = os.getenv("LEDGER_STATS_USER_ID", "").strip()
    if not user_id:
        logger.warning("LEDGER_STATS_USER_ID is required to print statistics.")
        return

    start = _parse_datetime(os.getenv("LEDGER_STATS_START"), logger)
    end = _parse_datetime(os.getenv("LEDGER_STATS_END"), logger)

    repository = build_statistics_repository(build_database_adapter())
    use_case = GetStatisticsUseCase(repository, logger=logger)
    statistics = use_case.execute(user_id, start=start, end=end)
    print(json.dumps(statistics_to_dict(statistics), indent=2, sort_keys=True))


if __name__ == "__main__":  # pragma: no cover
    main()
