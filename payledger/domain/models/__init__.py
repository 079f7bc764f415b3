"""Domain models package."""

from .accounts import Account
from .bills import Bill, SafeToSpend, UpcomingBill
from .goals import SavingsGoal
from .overview import BalanceTotals, Overview
from .periods import (
    PayPeriod,
    PayPeriodDetail,
    PayPeriodSummary,
    PaySettings,
    SummaryDelta,
)
from .schedules import (
    CatchUpResult,
    IncomeDeposit,
    IncomeSource,
    RecurringDefinition,
)
from .transactions import (
    PostedTransaction,
    Transaction,
    TransactionChanges,
    TransactionPage,
    TransactionQuery,
    TransactionRequest,
)

__all__ = [
    "Account",
    "Bill",
    "SafeToSpend",
    "UpcomingBill",
    "SavingsGoal",
    "BalanceTotals",
    "Overview",
    "PayPeriod",
    "PayPeriodDetail",
    "PayPeriodSummary",
    "PaySettings",
    "SummaryDelta",
    "CatchUpResult",
    "IncomeDeposit",
    "IncomeSource",
    "RecurringDefinition",
    "PostedTransaction",
    "Transaction",
    "TransactionChanges",
    "TransactionPage",
    "TransactionQuery",
    "TransactionRequest",
]
