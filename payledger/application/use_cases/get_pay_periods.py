"""Use cases for reading pay-period summaries."""

from datetime import date

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.domain.constants import MAX_PERIODS_PAGE
from payledger.domain.errors import NotFoundError, ValidationError
from payledger.domain.models import PayPeriodDetail, PayPeriodSummary
from payledger.infrastructure.logging.logger import get_app_logger


class GetPayPeriodsUseCase:
    """List period summaries or read one period with its transactions."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        limit: int,
        before: date | None = None,
    ) -> list[PayPeriodSummary]:
        """Return summaries newest first.

        Args:
            user_id: Verified owner of the ledger.
            limit: Maximum number of periods, capped at 12.
            before: Only periods starting before this date.
        """
        if limit < 1:
            raise ValidationError("limit must be positive")
        with self._repository.unit_of_work(user_id) as uow:
            return uow.list_period_summaries(
                min(limit, MAX_PERIODS_PAGE),
                before=before,
            )

    def get(self, user_id: str, period_id: str) -> PayPeriodDetail:
        """Return one period summary with its transactions.

        Raises:
            NotFoundError: If no summary exists for the period.
        """
        with self._repository.unit_of_work(user_id) as uow:
            summary = uow.get_period_summary(period_id)
            if summary is None:
                raise NotFoundError(f"Pay period not found: {period_id}")
            transactions = uow.list_period_transactions(period_id)
        return PayPeriodDetail(summary=summary, transactions=transactions)


__all__ = ["GetPayPeriodsUseCase"]
