"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort, LedgerUnitOfWorkPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
    "LedgerUnitOfWorkPort",
]
