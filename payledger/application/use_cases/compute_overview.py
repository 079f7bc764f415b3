"""Use case building the safe-to-spend overview."""

from datetime import date, timedelta

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.application.use_cases.ledger_effects import default_clock
from payledger.domain.constants import (
    RECENT_TRANSACTIONS_DAYS,
    RECENT_TRANSACTIONS_LIMIT,
)
from payledger.domain.errors import NotFoundError
from payledger.domain.models import Overview, TransactionQuery
from payledger.domain.services.pay_period import period_for_settings
from payledger.domain.services.reserve import (
    bills_to_auto_mark,
    compute_balance_totals,
    compute_safe_to_spend,
)
from payledger.infrastructure.logging.logger import get_app_logger


class ComputeOverviewUseCase:
    """Compose balances, the current period and the bill reserve.

    Before reading, bills flagged ``auto_mark_paid`` whose due date passed
    in the current period are marked paid. That sweep runs in its own unit
    of work and a failure there only produces a warning.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
        clock=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._clock = clock or default_clock

    def execute(self, user_id: str, today: date | None = None) -> Overview:
        """Return the overview for a user.

        Args:
            user_id: Verified owner of the ledger.
            today: Reference date; defaults to the clock.

        Returns:
            Overview: Accounts, totals, current period, safe-to-spend,
                category budgets and the last week of transactions.

        Raises:
            NotFoundError: If settings or the primary account are missing.
        """
        today = today or self._clock()
        self._auto_mark_bills(user_id, today)

        with self._repository.unit_of_work(user_id) as uow:
            settings = uow.get_settings()
            if settings is None:
                raise NotFoundError("Pay settings not found")
            if not settings.primary_account_id:
                raise NotFoundError("Primary account is not configured")

            accounts = uow.list_accounts()
            primary = next(
                (
                    account
                    for account in accounts
                    if account.id == settings.primary_account_id
                ),
                None,
            )
            if primary is None:
                raise NotFoundError(
                    f"Primary account not found: {settings.primary_account_id}"
                )

            period = period_for_settings(settings, today)
            uow.ensure_period_summary(period)
            summary = uow.get_period_summary(period.id)
            safe_to_spend = compute_safe_to_spend(
                primary.balance,
                uow.list_bills(active_only=True),
                today,
                period,
            )
            spending = uow.category_spending(period.id)
            goals = uow.list_goals()
            budgets = uow.category_budgets()
            since = today - timedelta(days=RECENT_TRANSACTIONS_DAYS)
            recent = uow.list_transactions(
                TransactionQuery(
                    start_date=since,
                    limit=RECENT_TRANSACTIONS_LIMIT,
                )
            )[:RECENT_TRANSACTIONS_LIMIT]

        return Overview(
            accounts=accounts,
            primary_account=primary,
            totals=compute_balance_totals(accounts),
            pay_frequency=settings.pay_frequency,
            next_pay_date=period.next_period_start,
            current_period=summary,
            spending_by_category=spending,
            upcoming_bills=safe_to_spend.upcoming_bills,
            safe_to_spend=safe_to_spend,
            savings_goals=goals,
            category_budgets=budgets,
            recent_transactions=recent,
        )

    def _auto_mark_bills(self, user_id: str, today: date) -> None:
        try:
            with self._repository.unit_of_work(user_id) as uow:
                settings = uow.get_settings()
                if settings is None:
                    return
                period = period_for_settings(settings, today)
                marked = bills_to_auto_mark(uow.list_bills(), today, period)
                for bill, due_date in marked:
                    uow.set_bill_last_paid(bill.id, due_date)
                    self._logger.info(
                        f"Auto-marked bill {bill.id} paid on {due_date}"
                    )
        except Exception as exc:
            self._logger.warning(
                f"Auto-mark-paid sweep failed for user {user_id}: {exc}"
            )


__all__ = ["ComputeOverviewUseCase"]
