"""Catch-up processing for recurring definitions."""

from datetime import date

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.application.use_cases.ledger_effects import (
    default_clock,
    new_transaction_id,
    record_posting,
    require_settings,
    utc_now,
)
from payledger.domain.constants import OriginKind
from payledger.domain.errors import ValidationError
from payledger.domain.models import (
    CatchUpResult,
    PaySettings,
    RecurringDefinition,
    Transaction,
)
from payledger.domain.services.pay_period import period_for_settings
from payledger.domain.services.recurrence import recurring_occurrences
from payledger.domain.services.validation import validate_account_pairing
from payledger.infrastructure.logging.logger import get_app_logger


class ProcessRecurringDueUseCase:
    """Post every missed occurrence of the user's recurring definitions.

    Each occurrence is its own unit of work: the transaction is inserted
    only if its occurrence key is absent, the effects follow only when the
    insert happened, and the definition's markers move forward in the same
    batch. Re-running with the same ``today`` posts nothing.
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
        """Process due recurring definitions up to ``today``.

        Args:
            user_id: Verified owner of the ledger.
            today: Last date that may be posted; defaults to the clock.

        Returns:
            CatchUpResult: Posted and skipped counts.

        Raises:
            ValidationError: If pay settings are missing.
        """
        today = today or self._clock()
        with self._repository.unit_of_work(user_id) as uow:
            settings = require_settings(uow)
            definitions = uow.list_due_recurring(today)

        posted_count = 0
        skipped_count = 0
        for definition in definitions:
            posted, skipped = self._process_definition(
                user_id,
                settings,
                definition,
                today,
            )
            posted_count += posted
            skipped_count += skipped

        self._logger.info(
            f"Recurring catch-up for user {user_id} as of {today}: "
            f"posted={posted_count} skipped={skipped_count}"
        )
        return CatchUpResult(
            posted_count=posted_count,
            skipped_count=skipped_count,
        )

    def _process_definition(
        self,
        user_id: str,
        settings: PaySettings,
        definition: RecurringDefinition,
        today: date,
    ) -> tuple[int, int]:
        posted = 0
        next_due_date = definition.next_due_date
        for due_date, following in recurring_occurrences(definition, today):
            with self._repository.unit_of_work(user_id) as uow:
                current = uow.get_recurring(definition.id)
                if current is None or not current.is_active:
                    return posted, 0
                if (
                    current.last_processed_date is not None
                    and due_date <= current.last_processed_date
                ):
                    next_due_date = following
                    continue

                account = uow.get_account(current.account_id)
                if account is None:
                    self._logger.warning(
                        f"Skipping recurring {current.id}: account "
                        f"{current.account_id} not found"
                    )
                    return posted, 1
                try:
                    validate_account_pairing(current.kind, account, None)
                except ValidationError as exc:
                    self._logger.warning(
                        f"Skipping recurring {current.id}: {exc.message}"
                    )
                    return posted, 1

                period = period_for_settings(settings, due_date)
                now = utc_now()
                transaction = Transaction(
                    id=self._id_factory(),
                    date=due_date,
                    amount=current.amount,
                    description=current.description,
                    kind=current.kind,
                    source_account_id=account.id,
                    category=current.category,
                    pay_period_id=period.id,
                    origin_kind=OriginKind.RECURRING,
                    origin_id=current.id,
                    created_at=now,
                    updated_at=now,
                )
                if uow.insert_occurrence(transaction):
                    record_posting(uow, transaction, period, account)
                    posted += 1
                else:
                    self._logger.info(
                        f"Recurring {current.id} on {due_date} already posted"
                    )
                uow.advance_recurring(current.id, following, due_date)
            next_due_date = following

        with self._repository.unit_of_work(user_id) as uow:
            uow.advance_recurring(definition.id, next_due_date, today)
        return posted, 0


__all__ = ["ProcessRecurringDueUseCase"]
