"""Occurrence walking for recurring definitions and income sources."""

from collections.abc import Iterable, Iterator
from datetime import date, timedelta

from payledger.domain.constants import RecurrenceFrequency
from payledger.domain.errors import ValidationError
from payledger.domain.models.schedules import (
    IncomeDeposit,
    IncomeSource,
    RecurringDefinition,
)
from payledger.domain.services.calendar import add_months
from payledger.domain.services.pay_period import calculate_period

_INTERVAL_DAYS = {
    RecurrenceFrequency.DAILY: 1,
    RecurrenceFrequency.WEEKLY: 7,
    RecurrenceFrequency.BIWEEKLY: 14,
}


def advance_due_date(
    frequency: RecurrenceFrequency,
    current: date,
    anchor_day: int,
) -> date:
    """Return the due date one interval after ``current``.

    Monthly dates keep ``anchor_day`` (clamped), so a definition started on
    the 31st returns to the 31st after a short month.
    """
    if frequency is RecurrenceFrequency.MONTHLY:
        return add_months(current, 1, anchor_day)
    try:
        return current + timedelta(days=_INTERVAL_DAYS[frequency])
    except KeyError as exc:
        raise ValidationError(
            f"Invalid recurrence frequency: {frequency}"
        ) from exc


def recurring_occurrences(
    definition: RecurringDefinition,
    today: date,
) -> Iterator[tuple[date, date]]:
    """Yield (due date, following due date) pairs up to today.

    Args:
        definition: Recurring definition to walk.
        today: Last date that may be posted.
    """
    current = definition.next_due_date
    anchor_day = definition.start_date.day
    while current <= today:
        following = advance_due_date(definition.frequency, current, anchor_day)
        yield current, following
        current = following


def income_pay_dates(source: IncomeSource, today: date) -> Iterator[date]:
    """Yield unprocessed pay dates of an income source up to today.

    A source that was never processed starts at the pay date of the period
    enclosing today rather than backfilling its history.
    """
    if source.last_processed_date is None:
        current = _period_start(source, today)
    else:
        current = _next_period_start(source, source.last_processed_date)
    while current <= today:
        yield current
        current = _next_period_start(source, current)


def merge_deposits(deposits: Iterable[IncomeDeposit]) -> list[IncomeDeposit]:
    """Combine deposits into one per account, keeping first-seen order."""
    totals: dict[str, IncomeDeposit] = {}
    for deposit in deposits:
        existing = totals.get(deposit.account_id)
        if existing is None:
            totals[deposit.account_id] = deposit
        else:
            totals[deposit.account_id] = IncomeDeposit(
                account_id=deposit.account_id,
                amount=existing.amount + deposit.amount,
            )
    return list(totals.values())


def _period_start(source: IncomeSource, target: date) -> date:
    return calculate_period(
        source.frequency,
        source.anchor_date,
        source.semimonthly_days,
        target,
    ).period_start


def _next_period_start(source: IncomeSource, target: date) -> date:
    return calculate_period(
        source.frequency,
        source.anchor_date,
        source.semimonthly_days,
        target,
    ).next_period_start


__all__ = [
    "advance_due_date",
    "recurring_occurrences",
    "income_pay_dates",
    "merge_deposits",
]
