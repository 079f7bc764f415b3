"""Use case for recording a paycheck by hand."""

from datetime import date

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.application.use_cases.ledger_effects import (
    default_clock,
    new_transaction_id,
    record_posting,
    require_account,
    require_settings,
    utc_now,
)
from payledger.application.use_cases.process_income_due import (
    income_transaction,
)
from payledger.domain.constants import OriginKind, TransactionKind
from payledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from payledger.domain.models import IncomeDeposit, PostedTransaction
from payledger.domain.services.pay_period import period_for_settings
from payledger.domain.services.recurrence import merge_deposits
from payledger.domain.services.validation import (
    validate_account_pairing,
    validate_amount,
)
from payledger.infrastructure.logging.logger import get_app_logger


class AddPaycheckUseCase:
    """Post one INCOME per deposit of an income source on a pay date."""

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

    def execute(
        self,
        user_id: str,
        source_id: str,
        pay_date: date | None = None,
        deposits: list[IncomeDeposit] | None = None,
    ) -> list[PostedTransaction]:
        """Record a paycheck and move the source marker forward.

        Args:
            user_id: Verified owner of the ledger.
            source_id: Income source paid.
            pay_date: Pay date; defaults to the clock.
            deposits: Optional override of the source's deposits.

        Returns:
            list[PostedTransaction]: One posting per deposit account.

        Raises:
            NotFoundError: If the source or a deposit account is unknown.
            ConflictError: If this paycheck was already posted.
            ValidationError: If no deposits are available.
        """
        pay_date = pay_date or self._clock()
        results: list[PostedTransaction] = []

        with self._repository.unit_of_work(user_id) as uow:
            settings = require_settings(uow)
            source = uow.get_income_source(source_id)
            if source is None:
                raise NotFoundError(f"Income source not found: {source_id}")
            merged = merge_deposits(deposits or source.deposits)
            if not merged:
                raise ValidationError("Deposits are required")

            accounts = {}
            for deposit in merged:
                validate_amount(deposit.amount)
                account = require_account(uow, deposit.account_id)
                validate_account_pairing(TransactionKind.INCOME, account, None)
                if uow.occurrence_exists(
                    OriginKind.INCOME,
                    source.id,
                    pay_date,
                    account.id,
                ):
                    raise ConflictError(
                        f"Paycheck of {source.name} on {pay_date} "
                        f"already posted to {account.id}"
                    )
                accounts[account.id] = account

            period = period_for_settings(settings, pay_date)
            now = utc_now()
            for deposit in merged:
                transaction = income_transaction(
                    self._id_factory(),
                    source,
                    deposit,
                    pay_date,
                    period,
                    now,
                )
                uow.insert_transaction(transaction)
                balances = record_posting(
                    uow,
                    transaction,
                    period,
                    accounts[deposit.account_id],
                )
                results.append(
                    PostedTransaction(transaction=transaction, balances=balances)
                )
            uow.mark_income_processed(source.id, pay_date)

        self._logger.info(
            f"Added paycheck of {source_id} on {pay_date}: "
            f"{len(results)} deposits"
        )
        return results


__all__ = ["AddPaycheckUseCase"]
