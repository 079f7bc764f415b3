"""CLI adapter creating the ledger tables.

The database URL is read from ``LEDGER_DB_URL`` (or a ``.env`` file).
"""

from payledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from payledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from payledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create every missing ledger table."""
    logger = get_app_logger()
    db_adapter = SqlAlchemyDatabaseEngineAdapter()
    repository = SqlAlchemyLedgerRepository(db_adapter, logger=logger)

    repository.create_schema()

    print("Ledger schema created.")


if __name__ == "__main__":  # pragma: no cover
    main()
