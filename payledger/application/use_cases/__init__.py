"""Application use cases package."""

from .add_paycheck import AddPaycheckUseCase
from .compute_overview import ComputeOverviewUseCase
from .contribute_goal import ContributeToGoalUseCase
from .delete_transaction import DeleteTransactionUseCase
from .edit_transaction import EditTransactionUseCase
from .get_pay_periods import GetPayPeriodsUseCase
from .list_transactions import ListTransactionsUseCase
from .post_transaction import PostTransactionUseCase
from .process_income_due import ProcessIncomeDueUseCase
from .process_recurring_due import ProcessRecurringDueUseCase

__all__ = [
    "AddPaycheckUseCase",
    "ComputeOverviewUseCase",
    "ContributeToGoalUseCase",
    "DeleteTransactionUseCase",
    "EditTransactionUseCase",
    "GetPayPeriodsUseCase",
    "ListTransactionsUseCase",
    "PostTransactionUseCase",
    "ProcessIncomeDueUseCase",
    "ProcessRecurringDueUseCase",
]
