"""Domain models for the dashboard overview."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from payledger.domain.constants import PayFrequency
from payledger.domain.models.accounts import Account
from payledger.domain.models.bills import SafeToSpend, UpcomingBill
from payledger.domain.models.goals import SavingsGoal
from payledger.domain.models.periods import PayPeriodSummary
from payledger.domain.models.transactions import Transaction


@dataclass(frozen=True)
class BalanceTotals:
    """Balances aggregated across all accounts."""

    cash_balance: Decimal
    credit_owed: Decimal
    total_credit_limit: Decimal
    total_credit_available: Decimal
    net_worth: Decimal


@dataclass(frozen=True)
class Overview:
    """Read-only composite of accounts, period and safe-to-spend."""

    accounts: list[Account]
    primary_account: Account
    totals: BalanceTotals
    pay_frequency: PayFrequency
    next_pay_date: date
    current_period: PayPeriodSummary
    spending_by_category: dict[str, Decimal]
    upcoming_bills: list[UpcomingBill]
    safe_to_spend: SafeToSpend
    savings_goals: list[SavingsGoal]
    category_budgets: dict[str, Decimal]
    recent_transactions: list[Transaction]


__all__ = ["BalanceTotals", "Overview"]
