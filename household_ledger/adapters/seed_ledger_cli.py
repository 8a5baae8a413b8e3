"""CLI adapter to seed a demo household into the ledger database."""

from household_ledger.application.use_cases.seed_household import (
    SeedHouseholdUseCase,
)
from household_ledger.infrastructure.container import (
    build_database_adapter,
    build_ledger_repository,
)
from household_ledger.infrastructure.db import create_schema
from household_ledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create the schema if needed and seed the demo household."""
    logger = get_app_logger()
    adapter = build_database_adapter()
    create_schema(adapter.get_ledger_engine())
    use_case = SeedHouseholdUseCase(
        ledger_repository=build_ledger_repository(adapter),
        logger=logger,
    )
    result = use_case.run()
    print(
        f"Seeded {len(result.user_ids)} members and "
        f"{len(result.category_ids)} categories. "
        f"shared_account={result.shared_account_id}, "
        f"principal_account={result.principal_account_id}."
    )
    print(
        "Set LEDGER_PRINCIPAL_ACCOUNT_ID="
        f"{result.principal_account_id} to enable CUP conversion of incomes."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
