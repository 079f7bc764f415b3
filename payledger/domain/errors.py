"""Ledger error taxonomy.

Every error carries a machine-readable ``code`` used by the API envelope.
ValidationError, NotFoundError and ConflictError are surfaced verbatim to
callers; InternalError messages are replaced by a generic one.
"""


class LedgerError(Exception):
    """Base exception for all ledger engine failures."""

    code = "LEDGER_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Raised when a request is malformed or violates input rules."""

    code = "VALIDATION_ERROR"


class NotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""

    code = "NOT_FOUND"


class ConflictError(LedgerError):
    """Raised when a request violates a business rule."""

    code = "CONFLICT"


class InternalError(LedgerError):
    """Raised on unexpected failures such as an unavailable datastore."""

    code = "INTERNAL_ERROR"


__all__ = [
    "LedgerError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]
