"""Tests for recurring occurrence and income pay-date walking."""

from datetime import date
from decimal import Decimal

from payledger.domain.constants import (
    PayFrequency,
    RecurrenceFrequency,
    TransactionKind,
)
from payledger.domain.models import (
    IncomeDeposit,
    IncomeSource,
    RecurringDefinition,
)
from payledger.domain.services.recurrence import (
    advance_due_date,
    income_pay_dates,
    merge_deposits,
    recurring_occurrences,
)


def _definition(frequency, start, next_due):
    return RecurringDefinition(
        id="gym",
        description="Gym",
        amount=Decimal("30"),
        kind=TransactionKind.PURCHASE,
        frequency=frequency,
        account_id="checking",
        start_date=start,
        next_due_date=next_due,
    )


def _source(last_processed=None):
    return IncomeSource(
        id="job",
        name="Employer",
        frequency=PayFrequency.BIWEEKLY,
        anchor_date=date(2025, 1, 3),
        deposits=(IncomeDeposit("checking", Decimal("1500")),),
        auto_add=True,
        last_processed_date=last_processed,
    )


def test_advance_due_date_intervals():
    """Daily, weekly and biweekly add fixed day counts."""
    start = date(2025, 1, 1)

    assert advance_due_date(RecurrenceFrequency.DAILY, start, 1) == date(2025, 1, 2)
    assert advance_due_date(RecurrenceFrequency.WEEKLY, start, 1) == date(2025, 1, 8)
    assert advance_due_date(RecurrenceFrequency.BIWEEKLY, start, 1) == date(2025, 1, 15)


def test_monthly_occurrences_keep_start_day():
    """Monthly walks clamp short months and return to the start day."""
    definition = _definition(
        RecurrenceFrequency.MONTHLY,
        date(2025, 1, 31),
        date(2025, 1, 31),
    )

    occurrences = list(recurring_occurrences(definition, date(2025, 3, 31)))

    assert occurrences == [
        (date(2025, 1, 31), date(2025, 2, 28)),
        (date(2025, 2, 28), date(2025, 3, 31)),
        (date(2025, 3, 31), date(2025, 4, 30)),
    ]


def test_no_occurrences_when_not_due():
    """A future next due date yields nothing."""
    definition = _definition(
        RecurrenceFrequency.WEEKLY,
        date(2025, 1, 1),
        date(2025, 2, 1),
    )

    assert list(recurring_occurrences(definition, date(2025, 1, 31))) == []


def test_income_never_processed_starts_at_current_period():
    """A new source posts only the pay date enclosing today."""
    assert list(income_pay_dates(_source(), date(2025, 1, 20))) == [
        date(2025, 1, 17),
    ]


def test_income_catches_up_from_last_processed():
    """Every pay date after the marker up to today is returned."""
    dates = list(income_pay_dates(_source(date(2025, 1, 20)), date(2025, 2, 15)))

    assert dates == [date(2025, 1, 31), date(2025, 2, 14)]


def test_merge_deposits_combines_same_account():
    """Deposits into the same account collapse into one."""
    merged = merge_deposits(
        [
            IncomeDeposit("checking", Decimal("1000")),
            IncomeDeposit("savings", Decimal("100")),
            IncomeDeposit("checking", Decimal("400")),
        ]
    )

    assert merged == [
        IncomeDeposit("checking", Decimal("1400")),
        IncomeDeposit("savings", Decimal("100")),
    ]
