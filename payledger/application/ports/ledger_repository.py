"""Port for reading and atomically writing ledger state.

Every write happens inside a unit of work: all statements issued through
one ``LedgerUnitOfWorkPort`` commit together or not at all. Balances and
period totals are only ever changed through increment methods.
"""

from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Protocol

from payledger.domain.constants import OriginKind
from payledger.domain.models import (
    Account,
    Bill,
    IncomeSource,
    PayPeriod,
    PayPeriodSummary,
    PaySettings,
    RecurringDefinition,
    SavingsGoal,
    SummaryDelta,
    Transaction,
    TransactionQuery,
)


class LedgerUnitOfWorkPort(Protocol):
    """Reads and writes scoped to one user and one atomic batch."""

    def get_settings(self) -> PaySettings | None:
        """Return the user's pay settings, if configured."""

    def get_account(self, account_id: str) -> Account | None:
        """Return one account."""

    def list_accounts(self) -> list[Account]:
        """Return all accounts of the user."""

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        """Return one transaction."""

    def list_transactions(self, query: TransactionQuery) -> list[Transaction]:
        """Return transactions matching the query, newest first.

        At most ``query.limit + 1`` rows are returned so callers can detect
        another page.
        """

    def list_period_transactions(self, period_id: str) -> list[Transaction]:
        """Return every transaction of a pay period, newest first."""

    def category_spending(self, period_id: str) -> dict[str, Decimal]:
        """Return purchase totals per category for a pay period."""

    def category_budgets(self) -> dict[str, Decimal]:
        """Return the spending budget configured per category."""

    def occurrence_exists(
        self,
        origin_kind: OriginKind,
        origin_id: str,
        occurrence_date: date,
        account_id: str,
    ) -> bool:
        """Return True if an occurrence was already posted."""

    def get_period_summary(self, period_id: str) -> PayPeriodSummary | None:
        """Return one period summary."""

    def list_period_summaries(
        self,
        limit: int,
        before: date | None = None,
    ) -> list[PayPeriodSummary]:
        """Return period summaries, newest first."""

    def get_bill(self, bill_id: str) -> Bill | None:
        """Return one bill."""

    def list_bills(self, active_only: bool = True) -> list[Bill]:
        """Return bills ordered by due day."""

    def latest_bill_payment_date(self, bill_id: str) -> date | None:
        """Return the latest bill-payment date recorded for a bill."""

    def list_due_recurring(self, today: date) -> list[RecurringDefinition]:
        """Return active recurring definitions due on or before today."""

    def get_recurring(self, definition_id: str) -> RecurringDefinition | None:
        """Return one recurring definition."""

    def list_auto_income_sources(self) -> list[IncomeSource]:
        """Return active income sources flagged for auto-add."""

    def get_income_source(self, source_id: str) -> IncomeSource | None:
        """Return one income source with its deposits."""

    def list_goals(self) -> list[SavingsGoal]:
        """Return savings goals."""

    def get_goal(self, goal_id: str) -> SavingsGoal | None:
        """Return one savings goal."""

    def insert_transaction(self, transaction: Transaction) -> None:
        """Insert a transaction record."""

    def insert_occurrence(self, transaction: Transaction) -> bool:
        """Insert a catch-up transaction unless its occurrence key exists.

        Returns:
            bool: True if the row was inserted.
        """

    def update_transaction(self, transaction: Transaction) -> None:
        """Replace the stored fields of a transaction."""

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction record."""

    def increment_balance(self, account_id: str, delta: Decimal) -> Decimal:
        """Atomically add ``delta`` to an account balance.

        Returns:
            Decimal: Balance after the increment.

        Raises:
            NotFoundError: If the account does not exist.
        """

    def ensure_period_summary(self, period: PayPeriod) -> None:
        """Create the period summary if it does not exist yet."""

    def increment_summary(self, period_id: str, delta: SummaryDelta) -> None:
        """Atomically add ``delta`` and re-derive the net change."""

    def set_bill_last_paid(self, bill_id: str, paid_on: date | None) -> None:
        """Record the last paid date of a bill."""

    def sync_linked_goals(self, account_id: str) -> None:
        """Copy the account balance into goals linked to it."""

    def add_to_goal(self, goal_id: str, delta: Decimal) -> bool:
        """Atomically add ``delta`` to an unlinked goal, clamped at zero.

        Returns False when no unlinked goal with that id exists.
        """

    def advance_recurring(
        self,
        definition_id: str,
        next_due_date: date,
        processed_on: date,
    ) -> None:
        """Move the recurring markers forward, never backwards."""

    def mark_income_processed(self, source_id: str, processed_on: date) -> None:
        """Move the income source marker forward, never backwards."""


class LedgerRepositoryPort(Protocol):
    """Factory of per-user units of work."""

    def unit_of_work(
        self,
        user_id: str,
    ) -> AbstractContextManager[LedgerUnitOfWorkPort]:
        """Open an atomic unit of work for a user.

        The batch commits when the context exits normally and rolls back
        entirely when it exits with an exception.
        """


__all__ = ["LedgerRepositoryPort", "LedgerUnitOfWorkPort"]
