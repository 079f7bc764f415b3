"""Domain models for recurring definitions and income sources."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from payledger.domain.constants import (
    PayFrequency,
    RecurrenceFrequency,
    TransactionKind,
)


@dataclass(frozen=True)
class RecurringDefinition:
    """Recurring income or purchase posted on each due date."""

    id: str
    description: str
    amount: Decimal
    kind: TransactionKind
    frequency: RecurrenceFrequency
    account_id: str
    start_date: date
    next_due_date: date
    last_processed_date: date | None = None
    is_active: bool = True
    category: str | None = None


@dataclass(frozen=True)
class IncomeDeposit:
    """Share of a paycheck deposited into one account."""

    account_id: str
    amount: Decimal


@dataclass(frozen=True)
class IncomeSource:
    """Paycheck source with its own pay schedule."""

    id: str
    name: str
    frequency: PayFrequency
    anchor_date: date
    deposits: tuple[IncomeDeposit, ...]
    semimonthly_days: tuple[int, int] | None = None
    auto_add: bool = False
    last_processed_date: date | None = None
    is_active: bool = True


@dataclass(frozen=True)
class CatchUpResult:
    """Outcome of a catch-up run.

    Attributes:
        posted_count: Transactions created by this run.
        skipped_count: Definitions or occurrences skipped.
    """

    posted_count: int
    skipped_count: int = 0


__all__ = [
    "RecurringDefinition",
    "IncomeDeposit",
    "IncomeSource",
    "CatchUpResult",
]
