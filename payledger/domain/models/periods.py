"""Domain models for pay periods and their aggregates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from payledger.domain.constants import PayFrequency
from payledger.domain.models.transactions import Transaction


@dataclass(frozen=True)
class PayPeriod:
    """Boundaries of one pay period.

    Attributes:
        period_start: First day of the period.
        period_end: Last day of the period (inclusive).
        next_period_start: First day of the following period.
    """

    period_start: date
    period_end: date
    next_period_start: date

    @property
    def id(self) -> str:
        return self.period_start.isoformat()

    def contains(self, day: date) -> bool:
        return self.period_start <= day <= self.period_end


@dataclass(frozen=True)
class PayPeriodSummary:
    """Running totals for one pay period."""

    id: str
    period_start: date
    period_end: date
    income_total: Decimal
    bills_total: Decimal
    discretionary_total: Decimal
    net_change: Decimal
    transaction_count: int


@dataclass(frozen=True)
class SummaryDelta:
    """Additive change applied to a period summary."""

    income_total: Decimal = Decimal("0")
    bills_total: Decimal = Decimal("0")
    discretionary_total: Decimal = Decimal("0")
    transaction_count: int = 0

    def __add__(self, other: "SummaryDelta") -> "SummaryDelta":
        return SummaryDelta(
            income_total=self.income_total + other.income_total,
            bills_total=self.bills_total + other.bills_total,
            discretionary_total=(
                self.discretionary_total + other.discretionary_total
            ),
            transaction_count=self.transaction_count + other.transaction_count,
        )

    def negate(self) -> "SummaryDelta":
        return SummaryDelta(
            income_total=-self.income_total,
            bills_total=-self.bills_total,
            discretionary_total=-self.discretionary_total,
            transaction_count=-self.transaction_count,
        )

    @property
    def is_zero(self) -> bool:
        return (
            self.income_total == 0
            and self.bills_total == 0
            and self.discretionary_total == 0
            and self.transaction_count == 0
        )


@dataclass(frozen=True)
class PaySettings:
    """User pay schedule settings read by the engine."""

    pay_frequency: PayFrequency
    pay_anchor_date: date
    semimonthly_days: tuple[int, int] | None = None
    primary_account_id: str | None = None
    net_pay_amount: Decimal | None = None


@dataclass(frozen=True)
class PayPeriodDetail:
    """A period summary with its transactions."""

    summary: PayPeriodSummary
    transactions: list[Transaction]


__all__ = [
    "PayPeriod",
    "PayPeriodSummary",
    "SummaryDelta",
    "PaySettings",
    "PayPeriodDetail",
]
