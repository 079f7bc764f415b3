"""Domain package for ledger rules and core models."""

from .constants import (
    AccountKind,
    AccountRole,
    OriginKind,
    PayFrequency,
    RecurrenceFrequency,
    TransactionKind,
)
from .errors import (
    ConflictError,
    InternalError,
    LedgerError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "AccountKind",
    "AccountRole",
    "OriginKind",
    "PayFrequency",
    "RecurrenceFrequency",
    "TransactionKind",
    "ConflictError",
    "InternalError",
    "LedgerError",
    "NotFoundError",
    "ValidationError",
]
