"""Domain services package."""

from .calendar import (
    add_months,
    days_in_month,
    last_monthly_due_date,
    next_monthly_due_date,
    normalize_day,
)
from .effects import (
    balance_deltas,
    balance_effect,
    summary_delta,
    summary_field,
)
from .pay_period import calculate_period, period_for_settings
from .recurrence import (
    advance_due_date,
    income_pay_dates,
    merge_deposits,
    recurring_occurrences,
)
from .reserve import (
    bills_to_auto_mark,
    compute_balance_totals,
    compute_safe_to_spend,
    is_paid_this_period,
)
from .validation import (
    validate_account_pairing,
    validate_amount,
    validate_request_fields,
)

__all__ = [
    "add_months",
    "days_in_month",
    "last_monthly_due_date",
    "next_monthly_due_date",
    "normalize_day",
    "balance_deltas",
    "balance_effect",
    "summary_delta",
    "summary_field",
    "calculate_period",
    "period_for_settings",
    "advance_due_date",
    "income_pay_dates",
    "merge_deposits",
    "recurring_occurrences",
    "bills_to_auto_mark",
    "compute_balance_totals",
    "compute_safe_to_spend",
    "is_paid_this_period",
    "validate_account_pairing",
    "validate_amount",
    "validate_request_fields",
]
