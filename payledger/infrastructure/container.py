"""Composition root for wiring infrastructure adapters."""

from datetime import date

from payledger.application.ports.database import DatabaseEnginePort
from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from payledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from payledger.infrastructure.logging.logger import get_app_logger
from payledger.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerRepositoryPort:
    """Return the ledger repository, creating the schema when configured."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or LedgerSettings.from_env()
    repository = SqlAlchemyLedgerRepository(
        resolved_db,
        logger=get_app_logger(),
    )
    if resolved_settings.create_schema:
        repository.create_schema()
    return repository


def build_clock(settings: LedgerSettings | None = None):
    """Return a callable giving the reference date for catch-up and reads.

    ``LEDGER_TODAY`` pins the date; otherwise the system date is used.
    """
    resolved_settings = settings or LedgerSettings.from_env()
    fixed_today = resolved_settings.today_override
    if fixed_today is None:
        return date.today
    return lambda: fixed_today


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_clock",
]
