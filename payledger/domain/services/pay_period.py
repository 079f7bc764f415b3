"""Pay-period boundary calculations.

A target date that equals a period boundary belongs to the period starting
on that date.
"""

from datetime import date, timedelta
from typing import Sequence

from payledger.domain.constants import PayFrequency
from payledger.domain.errors import ValidationError
from payledger.domain.models.periods import PayPeriod, PaySettings
from payledger.domain.services.calendar import clamped_date, shift_month

WEEKLY_DAYS = 7
BIWEEKLY_DAYS = 14


def calculate_period(
    frequency: PayFrequency | str,
    anchor: date,
    semimonthly_days: Sequence[int] | None,
    target: date,
) -> PayPeriod:
    """Return the pay period enclosing ``target``.

    Args:
        frequency: Pay frequency.
        anchor: A known pay date.
        semimonthly_days: Two days of month for semimonthly schedules.
        target: Date to locate.

    Returns:
        PayPeriod: Start, inclusive end and next period start.

    Raises:
        ValidationError: If the frequency is unknown or semimonthly days
            are missing or invalid.
    """
    frequency = coerce_pay_frequency(frequency)
    if frequency is PayFrequency.WEEKLY:
        return _interval_period(anchor, target, WEEKLY_DAYS)
    if frequency is PayFrequency.BIWEEKLY:
        return _interval_period(anchor, target, BIWEEKLY_DAYS)
    if frequency is PayFrequency.SEMIMONTHLY:
        return _semimonthly_period(semimonthly_days, target)
    return _monthly_period(anchor.day, target)


def period_for_settings(settings: PaySettings, target: date) -> PayPeriod:
    """Return the user's pay period enclosing ``target``."""
    return calculate_period(
        settings.pay_frequency,
        settings.pay_anchor_date,
        settings.semimonthly_days,
        target,
    )


def coerce_pay_frequency(value: PayFrequency | str) -> PayFrequency:
    if isinstance(value, PayFrequency):
        return value
    try:
        return PayFrequency(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError(f"Invalid pay frequency: {value}") from exc


def _interval_period(anchor: date, target: date, interval_days: int) -> PayPeriod:
    intervals = (target - anchor).days // interval_days
    period_start = anchor + timedelta(days=intervals * interval_days)
    if period_start > target:
        period_start -= timedelta(days=interval_days)
    next_start = period_start + timedelta(days=interval_days)
    return PayPeriod(
        period_start=period_start,
        period_end=next_start - timedelta(days=1),
        next_period_start=next_start,
    )


def _semimonthly_period(
    semimonthly_days: Sequence[int] | None,
    target: date,
) -> PayPeriod:
    first_day, second_day = _sorted_semimonthly_days(semimonthly_days)
    year, month = target.year, target.month
    first = clamped_date(year, month, first_day)
    second = clamped_date(year, month, second_day)

    if target < first:
        prev_year, prev_month = shift_month(year, month, -1)
        start = clamped_date(prev_year, prev_month, second_day)
        next_start = first
    elif target < second:
        start = first
        next_start = second
    else:
        start = second
        next_year, next_month = shift_month(year, month, 1)
        next_start = clamped_date(next_year, next_month, first_day)

    return PayPeriod(
        period_start=start,
        period_end=next_start - timedelta(days=1),
        next_period_start=next_start,
    )


def _monthly_period(anchor_day: int, target: date) -> PayPeriod:
    year, month = target.year, target.month
    this_month = clamped_date(year, month, anchor_day)

    if target < this_month:
        prev_year, prev_month = shift_month(year, month, -1)
        start = clamped_date(prev_year, prev_month, anchor_day)
        next_start = this_month
    else:
        start = this_month
        next_year, next_month = shift_month(year, month, 1)
        next_start = clamped_date(next_year, next_month, anchor_day)

    return PayPeriod(
        period_start=start,
        period_end=next_start - timedelta(days=1),
        next_period_start=next_start,
    )


def _sorted_semimonthly_days(
    semimonthly_days: Sequence[int] | None,
) -> tuple[int, int]:
    if not semimonthly_days or len(semimonthly_days) != 2:
        raise ValidationError("Semimonthly frequency requires two pay days")
    first, second = sorted(int(day) for day in semimonthly_days)
    if first < 1 or second > 31:
        raise ValidationError("Semimonthly pay days must be between 1 and 31")
    if first == second:
        raise ValidationError("Semimonthly pay days must be different")
    return first, second


__all__ = [
    "WEEKLY_DAYS",
    "BIWEEKLY_DAYS",
    "calculate_period",
    "period_for_settings",
    "coerce_pay_frequency",
]
