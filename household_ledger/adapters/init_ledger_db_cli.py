"""Simple CLI to create the ledger schema.

This adapter is meant for local operations: it instantiates the concrete
database adapter, checks the connection and creates any missing table.
"""

from household_ledger.infrastructure.container import build_database_adapter
from household_ledger.infrastructure.db import create_schema
from household_ledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create the ledger tables in the configured database."""
    logger = get_app_logger()
    adapter = build_database_adapter()
    engine = adapter.get_ledger_engine()
    logger.info(f"Ledger DB: {engine.url}")

    with engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")
    create_schema(engine)

    logger.info("Ledger schema is ready.")
    print("Ledger schema created.")


if __name__ == "__main__":  # pragma: no cover
    main()
