"""Safe-to-spend and bill status computations."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from payledger.domain.models.accounts import Account
from payledger.domain.models.bills import Bill, SafeToSpend, UpcomingBill
from payledger.domain.models.overview import BalanceTotals
from payledger.domain.models.periods import PayPeriod
from payledger.domain.services.calendar import (
    last_monthly_due_date,
    next_monthly_due_date,
)


def is_paid_this_period(bill: Bill, period_start: date) -> bool:
    """Return True when the bill was paid on or after the period start."""
    return bill.last_paid_date is not None and bill.last_paid_date >= period_start


def compute_safe_to_spend(
    balance: Decimal,
    bills: Iterable[Bill],
    today: date,
    period: PayPeriod,
) -> SafeToSpend:
    """Compute the reserve for bills due before the next pay date.

    Args:
        balance: Current balance of the primary account.
        bills: Bills to consider; inactive ones are ignored.
        today: Reference date for the next due dates.
        period: Current pay period; its ``next_period_start`` is the next
            pay date.

    Returns:
        SafeToSpend: Upcoming bills, reserve and safe amount.
    """
    upcoming: list[UpcomingBill] = []
    required_reserve = Decimal("0")
    for bill in bills:
        if not bill.is_active:
            continue
        due_date = next_monthly_due_date(bill.due_day, today)
        if due_date > period.next_period_start:
            continue
        paid = is_paid_this_period(bill, period.period_start)
        upcoming.append(
            UpcomingBill(
                id=bill.id,
                name=bill.name,
                amount=bill.amount,
                due_date=due_date,
                is_paid_this_period=paid,
                is_auto_pay=bill.is_auto_pay,
            )
        )
        if not paid:
            required_reserve += bill.amount

    upcoming.sort(key=lambda item: (item.due_date, item.name))
    safe_amount = max(Decimal("0"), balance - required_reserve)
    return SafeToSpend(
        current_balance=balance,
        required_reserve=required_reserve,
        safe_amount=safe_amount,
        upcoming_bills=upcoming,
    )


def bills_to_auto_mark(
    bills: Iterable[Bill],
    today: date,
    period: PayPeriod,
) -> list[tuple[Bill, date]]:
    """Return auto-mark-paid bills whose due date passed unpaid.

    Only due dates inside the current period count, so a bill due in a
    previous period is never marked paid for this one.

    Returns:
        list[tuple[Bill, date]]: Bills and the due date to record.
    """
    marked = []
    for bill in bills:
        if not (bill.is_active and bill.auto_mark_paid):
            continue
        due_date = last_monthly_due_date(bill.due_day, today)
        if due_date < period.period_start:
            continue
        if is_paid_this_period(bill, period.period_start):
            continue
        marked.append((bill, due_date))
    return marked


def compute_balance_totals(accounts: Iterable[Account]) -> BalanceTotals:
    """Aggregate cash, credit and net worth across accounts."""
    cash_balance = Decimal("0")
    credit_owed = Decimal("0")
    credit_limit = Decimal("0")
    for account in accounts:
        if account.is_liability:
            credit_owed += account.balance
            credit_limit += account.credit_limit or Decimal("0")
        else:
            cash_balance += account.balance
    return BalanceTotals(
        cash_balance=cash_balance,
        credit_owed=credit_owed,
        total_credit_limit=credit_limit,
        total_credit_available=credit_limit - credit_owed,
        net_worth=cash_balance - credit_owed,
    )


__all__ = [
    "is_paid_this_period",
    "compute_safe_to_spend",
    "bills_to_auto_mark",
    "compute_balance_totals",
]
