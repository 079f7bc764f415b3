"""Calendar normalization helpers.

Days of month are always clamped to the last valid day of the target month,
never rolled over into the next one.
"""

from calendar import monthrange
from datetime import date


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month.

    Args:
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        int: Number of days in that month.
    """
    return monthrange(year, month)[1]


def normalize_day(day: int, year: int, month: int) -> int:
    """Clamp a day of month to a valid day for the given month.

    Args:
        day: Requested day of month (>= 1).
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        int: ``min(day, days_in_month(year, month))``.
    """
    return min(day, days_in_month(year, month))


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move a (year, month) pair by ``offset`` months."""
    total = year * 12 + (month - 1) + offset
    return total // 12, total % 12 + 1


def clamped_date(year: int, month: int, day: int) -> date:
    """Build a date with ``day`` clamped to the month length."""
    return date(year, month, normalize_day(day, year, month))


def add_months(start: date, months: int, anchor_day: int | None = None) -> date:
    """Add months to a date, clamping to the anchor day of month.

    Args:
        start: Date to shift.
        months: Number of months to add (may be negative).
        anchor_day: Preferred day of month; defaults to ``start.day``.

    Returns:
        date: Shifted date on ``anchor_day`` or the month's last day.
    """
    year, month = shift_month(start.year, start.month, months)
    return clamped_date(year, month, anchor_day or start.day)


def next_monthly_due_date(due_day: int, today: date) -> date:
    """Return the next date on or after today falling on ``due_day``."""
    this_month = clamped_date(today.year, today.month, due_day)
    if today <= this_month:
        return this_month
    year, month = shift_month(today.year, today.month, 1)
    return clamped_date(year, month, due_day)


def last_monthly_due_date(due_day: int, today: date) -> date:
    """Return the latest date on or before today falling on ``due_day``."""
    this_month = clamped_date(today.year, today.month, due_day)
    if this_month <= today:
        return this_month
    year, month = shift_month(today.year, today.month, -1)
    return clamped_date(year, month, due_day)


__all__ = [
    "days_in_month",
    "normalize_day",
    "shift_month",
    "clamped_date",
    "add_months",
    "next_monthly_due_date",
    "last_monthly_due_date",
]
