"""Domain models for bills and safe-to-spend figures."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Bill:
    """Monthly bill with a derived paid-this-period status."""

    id: str
    name: str
    amount: Decimal
    due_day: int
    is_active: bool = True
    is_auto_pay: bool = False
    auto_mark_paid: bool = False
    last_paid_date: date | None = None


@dataclass(frozen=True)
class UpcomingBill:
    """Bill due on or before the next pay date."""

    id: str
    name: str
    amount: Decimal
    due_date: date
    is_paid_this_period: bool
    is_auto_pay: bool


@dataclass(frozen=True)
class SafeToSpend:
    """Reserve computation for the primary account.

    Attributes:
        current_balance: Balance of the primary account.
        required_reserve: Sum of unpaid bills due before the next pay date.
        safe_amount: Balance minus reserve, never negative.
        upcoming_bills: Qualifying bills, paid ones included.
    """

    current_balance: Decimal
    required_reserve: Decimal
    safe_amount: Decimal
    upcoming_bills: list[UpcomingBill]


__all__ = ["Bill", "UpcomingBill", "SafeToSpend"]
