"""Catch-up processing for auto-add income sources."""

from datetime import date, datetime

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.application.use_cases.ledger_effects import (
    default_clock,
    new_transaction_id,
    record_posting,
    require_settings,
    utc_now,
)
from payledger.domain.constants import (
    INCOME_CATEGORY,
    OriginKind,
    TransactionKind,
)
from payledger.domain.models import (
    CatchUpResult,
    IncomeDeposit,
    IncomeSource,
    PayPeriod,
    PaySettings,
    Transaction,
)
from payledger.domain.services.pay_period import period_for_settings
from payledger.domain.services.recurrence import (
    income_pay_dates,
    merge_deposits,
)
from payledger.infrastructure.logging.logger import get_app_logger


def income_transaction(
    transaction_id: str,
    source: IncomeSource,
    deposit: IncomeDeposit,
    pay_date: date,
    period: PayPeriod,
    now: datetime,
) -> Transaction:
    """Build the INCOME transaction for one deposit of a paycheck."""
    return Transaction(
        id=transaction_id,
        date=pay_date,
        amount=deposit.amount,
        description=source.name,
        kind=TransactionKind.INCOME,
        source_account_id=deposit.account_id,
        category=INCOME_CATEGORY,
        pay_period_id=period.id,
        origin_kind=OriginKind.INCOME,
        origin_id=source.id,
        created_at=now,
        updated_at=now,
    )


class ProcessIncomeDueUseCase:
    """Post the paychecks of auto-add income sources up to today.

    Pay dates are the period starts of each source's own schedule. A
    source that was never processed starts at the pay date of the period
    enclosing today. Each pay date is one unit of work that posts one
    INCOME per deposit account and moves the source marker forward.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
        id_factory=None,
        clock=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or new_transaction_id
        self._clock = clock or default_clock

    def execute(self, user_id: str, today: date | None = None) -> CatchUpResult:
        """Process auto-add income sources up to ``today``.

        Args:
            user_id: Verified owner of the ledger.
            today: Last pay date that may be posted; defaults to the clock.

        Returns:
            CatchUpResult: Posted and skipped counts.

        Raises:
            ValidationError: If pay settings are missing.
        """
        today = today or self._clock()
        with self._repository.unit_of_work(user_id) as uow:
            settings = require_settings(uow)
            sources = uow.list_auto_income_sources()

        posted_count = 0
        skipped_count = 0
        for source in sources:
            posted, skipped = self._process_source(
                user_id,
                settings,
                source,
                today,
            )
            posted_count += posted
            skipped_count += skipped

        self._logger.info(
            f"Income catch-up for user {user_id} as of {today}: "
            f"posted={posted_count} skipped={skipped_count}"
        )
        return CatchUpResult(
            posted_count=posted_count,
            skipped_count=skipped_count,
        )

    def _process_source(
        self,
        user_id: str,
        settings: PaySettings,
        source: IncomeSource,
        today: date,
    ) -> tuple[int, int]:
        posted = 0
        skipped = 0
        for pay_date in income_pay_dates(source, today):
            with self._repository.unit_of_work(user_id) as uow:
                current = uow.get_income_source(source.id)
                if current is None or not current.is_active:
                    return posted, skipped
                if (
                    current.last_processed_date is not None
                    and pay_date <= current.last_processed_date
                ):
                    continue

                period = period_for_settings(settings, pay_date)
                for deposit in merge_deposits(current.deposits):
                    account = uow.get_account(deposit.account_id)
                    if account is None or not account.is_asset:
                        self._logger.warning(
                            f"Skipping deposit of income source {current.id} "
                            f"on {pay_date}: account {deposit.account_id} "
                            "missing or not an asset"
                        )
                        skipped += 1
                        continue
                    transaction = income_transaction(
                        self._id_factory(),
                        current,
                        deposit,
                        pay_date,
                        period,
                        utc_now(),
                    )
                    if uow.insert_occurrence(transaction):
                        record_posting(uow, transaction, period, account)
                        posted += 1
                uow.mark_income_processed(current.id, pay_date)

        with self._repository.unit_of_work(user_id) as uow:
            uow.mark_income_processed(source.id, today)
        return posted, skipped


__all__ = [
    "ProcessIncomeDueUseCase",
    "income_transaction",
]
