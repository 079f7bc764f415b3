"""Use case for posting a manual ledger transaction."""

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.application.use_cases.ledger_effects import (
    new_transaction_id,
    record_posting,
    require_account,
    require_settings,
    utc_now,
)
from payledger.domain.errors import NotFoundError, ValidationError
from payledger.domain.models import (
    PostedTransaction,
    Transaction,
    TransactionRequest,
)
from payledger.domain.services.pay_period import period_for_settings
from payledger.domain.services.validation import (
    validate_account_pairing,
    validate_request_fields,
)
from payledger.infrastructure.logging.logger import get_app_logger


class PostTransactionUseCase:
    """Apply a transaction to balances and its pay-period summary.

    The insert, the balance increments, the bill marker, the summary
    increment and the linked-goal resync commit together or not at all.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
        id_factory=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port opening per-user units of work.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Optional callable returning new transaction ids.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or new_transaction_id

    def execute(
        self,
        user_id: str,
        request: TransactionRequest,
    ) -> PostedTransaction:
        """Validate and apply a transaction.

        Args:
            user_id: Verified owner of the ledger.
            request: Transaction to post. The source account defaults to
                the primary account from the pay settings.

        Returns:
            PostedTransaction: Stored transaction and updated balances.

        Raises:
            ValidationError: If the request is malformed or settings are
                missing.
            NotFoundError: If an account or the referenced bill is unknown.
        """
        validate_request_fields(request)

        with self._repository.unit_of_work(user_id) as uow:
            settings = require_settings(uow)
            source_id = (
                request.source_account_id or settings.primary_account_id
            )
            if not source_id:
                raise ValidationError("source_account_id is required")

            source = require_account(uow, source_id)
            destination = None
            if request.destination_account_id:
                destination = require_account(
                    uow,
                    request.destination_account_id,
                )
            validate_account_pairing(request.kind, source, destination)

            if request.bill_id and uow.get_bill(request.bill_id) is None:
                raise NotFoundError(f"Bill not found: {request.bill_id}")

            period = period_for_settings(settings, request.date)
            now = utc_now()
            transaction = Transaction(
                id=self._id_factory(),
                date=request.date,
                amount=request.amount,
                description=request.description.strip(),
                kind=request.kind,
                source_account_id=source.id,
                destination_account_id=request.destination_account_id,
                bill_id=request.bill_id,
                category=request.category,
                pay_period_id=period.id,
                created_at=now,
                updated_at=now,
            )
            uow.insert_transaction(transaction)
            balances = record_posting(
                uow,
                transaction,
                period,
                source,
                destination,
            )

        self._logger.info(
            f"Posted {transaction.kind.value} {transaction.id} "
            f"amount={transaction.amount} period={period.id}"
        )
        return PostedTransaction(transaction=transaction, balances=balances)


__all__ = ["PostTransactionUseCase"]
