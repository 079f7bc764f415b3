"""Tests for pay-period boundary calculations."""

from datetime import date, timedelta

import pytest

from payledger.domain.constants import PayFrequency
from payledger.domain.errors import ValidationError
from payledger.domain.models import PaySettings
from payledger.domain.services.pay_period import (
    calculate_period,
    period_for_settings,
)


def test_biweekly_example_period():
    """A biweekly target mid-period resolves to the enclosing 14 days."""
    period = calculate_period(
        PayFrequency.BIWEEKLY,
        date(2025, 1, 3),
        None,
        date(2025, 1, 20),
    )

    assert period.period_start == date(2025, 1, 17)
    assert period.period_end == date(2025, 1, 30)
    assert period.next_period_start == date(2025, 1, 31)
    assert period.id == "2025-01-17"


def test_weekly_target_before_anchor_steps_back():
    """Targets before the anchor use floor division on the day offset."""
    period = calculate_period("weekly", date(2025, 1, 10), None, date(2025, 1, 2))

    assert period.period_start == date(2024, 12, 27)
    assert period.period_end == date(2025, 1, 2)


def test_boundary_date_belongs_to_period_starting_on_it():
    """A target equal to a pay date starts a new period."""
    period = calculate_period(
        PayFrequency.BIWEEKLY,
        date(2025, 1, 3),
        None,
        date(2025, 1, 31),
    )

    assert period.period_start == date(2025, 1, 31)


@pytest.mark.parametrize(
    ("target", "expected_start", "expected_next"),
    [
        (date(2025, 3, 10), date(2025, 2, 28), date(2025, 3, 15)),
        (date(2025, 3, 15), date(2025, 3, 15), date(2025, 3, 31)),
        (date(2025, 3, 20), date(2025, 3, 15), date(2025, 3, 31)),
        (date(2025, 3, 31), date(2025, 3, 31), date(2025, 4, 15)),
    ],
)
def test_semimonthly_cases(target, expected_start, expected_next):
    """Semimonthly periods cover before-first, between and after-second."""
    period = calculate_period(PayFrequency.SEMIMONTHLY, date(2025, 1, 15), (31, 15), target)

    assert period.period_start == expected_start
    assert period.next_period_start == expected_next


def test_monthly_anchor_on_31st_clamps_in_february():
    """Monthly anchors are clamped to short months, never rolled over."""
    period = calculate_period(
        PayFrequency.MONTHLY,
        date(2025, 1, 31),
        None,
        date(2025, 3, 5),
    )

    assert period.period_start == date(2025, 2, 28)
    assert period.period_end == date(2025, 3, 30)
    assert period.next_period_start == date(2025, 3, 31)


@pytest.mark.parametrize(
    ("frequency", "semimonthly_days"),
    [
        (PayFrequency.WEEKLY, None),
        (PayFrequency.BIWEEKLY, None),
        (PayFrequency.SEMIMONTHLY, (1, 16)),
        (PayFrequency.SEMIMONTHLY, (15, 31)),
        (PayFrequency.MONTHLY, None),
    ],
)
def test_period_always_encloses_target(frequency, semimonthly_days):
    """Every target lies inside its period and periods are contiguous."""
    anchor = date(2024, 1, 31)
    target = date(2023, 12, 1)
    while target <= date(2025, 3, 31):
        period = calculate_period(frequency, anchor, semimonthly_days, target)
        assert period.period_start <= target <= period.period_end
        assert period.next_period_start == period.period_end + timedelta(days=1)
        target += timedelta(days=3)


def test_unknown_frequency_raises_validation_error():
    """Unsupported frequencies are rejected."""
    with pytest.raises(ValidationError):
        calculate_period("fortnightly", date(2025, 1, 1), None, date(2025, 1, 2))


@pytest.mark.parametrize("days", [None, (15,), (15, 15), (0, 15), (15, 32)])
def test_semimonthly_requires_two_valid_days(days):
    """Semimonthly schedules need two distinct days in 1..31."""
    with pytest.raises(ValidationError):
        calculate_period(PayFrequency.SEMIMONTHLY, date(2025, 1, 1), days, date(2025, 1, 2))


def test_period_for_settings_uses_user_schedule():
    """period_for_settings forwards the stored schedule."""
    settings = PaySettings(
        pay_frequency=PayFrequency.SEMIMONTHLY,
        pay_anchor_date=date(2025, 1, 1),
        semimonthly_days=(1, 15),
    )

    period = period_for_settings(settings, date(2025, 2, 14))

    assert period.period_start == date(2025, 2, 1)
    assert period.period_end == date(2025, 2, 14)
