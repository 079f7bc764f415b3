"""Tests for calendar normalization helpers."""

from datetime import date

import pytest

from payledger.domain.services.calendar import (
    add_months,
    last_monthly_due_date,
    next_monthly_due_date,
    normalize_day,
)


@pytest.mark.parametrize(
    ("year", "expected"),
    [(2025, 28), (2024, 29)],
)
def test_normalize_day_31_in_february(year, expected):
    """Day 31 clamps to the last day of February."""
    assert normalize_day(31, year, 2) == expected


def test_normalize_day_keeps_valid_days():
    """Valid days pass through unchanged."""
    assert normalize_day(15, 2025, 4) == 15
    assert normalize_day(31, 2025, 4) == 30


def test_add_months_returns_to_anchor_after_short_month():
    """The anchor day is restored once the month is long enough."""
    february = add_months(date(2025, 1, 31), 1)
    march = add_months(february, 1, anchor_day=31)

    assert february == date(2025, 2, 28)
    assert march == date(2025, 3, 31)


def test_add_months_crosses_year_boundary():
    """Month arithmetic wraps years in both directions."""
    assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)
    assert add_months(date(2025, 1, 15), -1) == date(2024, 12, 15)


def test_next_monthly_due_date_rolls_to_next_month_after_due_day():
    """Once the due day has passed, the next due date is next month."""
    assert next_monthly_due_date(25, date(2025, 1, 25)) == date(2025, 1, 25)
    assert next_monthly_due_date(25, date(2025, 1, 26)) == date(2025, 2, 25)
    assert next_monthly_due_date(31, date(2025, 2, 10)) == date(2025, 2, 28)


def test_last_monthly_due_date_looks_back():
    """The last due date is on or before today."""
    assert last_monthly_due_date(18, date(2025, 1, 20)) == date(2025, 1, 18)
    assert last_monthly_due_date(25, date(2025, 1, 20)) == date(2024, 12, 25)
