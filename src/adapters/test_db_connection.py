"""Simple CLI to validate the GnuCash database connection.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer and runs a basic health
check against the GnuCash database.
"""

from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run a basic connectivity check against the GnuCash database."""
    adapter = SqlAlchemyDatabaseEngineAdapter()
    logger = get_app_logger()

    gnucash_engine = adapter.get_gnucash_engine()
    logger.info(f"GnuCash DB: {gnucash_engine.url}")

    with gnucash_engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    logger.info("GnuCash connection is working.")


if __name__ == "__main__":
    main()
