"""Request/response facade over the ledger use cases.

Each public method accepts a verified ``user_id`` and a plain dict payload
and always returns an envelope: ``{"success": True, "data": ...}`` or
``{"success": False, "error": {"code": ..., "message": ...}}``. Ledger
errors are reported with their own code and message and payload errors
from pydantic as ``VALIDATION_ERROR``. Anything else is logged with its
traceback and reported as a generic internal error.
"""

from typing import Any, Callable, Mapping

from pydantic import ValidationError as PayloadValidationError

from payledger.adapters.api.payload import (
    AsOfPayload,
    ContributionPayload,
    PaycheckPayload,
    PeriodsPayload,
    TransactionChangesPayload,
    TransactionPayload,
    TransactionQueryPayload,
    describe_errors,
)
from payledger.adapters.api.response import (
    GENERIC_ERROR_MESSAGE,
    error_response,
    success_response,
    to_jsonable,
)
from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.application.use_cases import (
    AddPaycheckUseCase,
    ComputeOverviewUseCase,
    ContributeToGoalUseCase,
    DeleteTransactionUseCase,
    EditTransactionUseCase,
    GetPayPeriodsUseCase,
    ListTransactionsUseCase,
    PostTransactionUseCase,
    ProcessIncomeDueUseCase,
    ProcessRecurringDueUseCase,
)
from payledger.domain.errors import InternalError, LedgerError, ValidationError
from payledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)

Payload = Mapping[str, Any] | None


class LedgerApi:
    """Envelope-returning entry points for every ledger operation."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        logger=None,
        usage_logger=None,
        clock: Callable | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Wire the use cases around one repository.

        Args:
            repository: Ledger repository port.
            logger: Optional application logger.
            usage_logger: Optional logger receiving one line per call.
            clock: Optional callable returning today's date.
            id_factory: Optional callable returning new transaction ids.
        """
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._post = PostTransactionUseCase(
            repository,
            logger=self._logger,
            id_factory=id_factory,
        )
        self._edit = EditTransactionUseCase(repository, logger=self._logger)
        self._delete = DeleteTransactionUseCase(
            repository,
            logger=self._logger,
        )
        self._overview = ComputeOverviewUseCase(
            repository,
            logger=self._logger,
            clock=clock,
        )
        self._recurring = ProcessRecurringDueUseCase(
            repository,
            logger=self._logger,
            id_factory=id_factory,
            clock=clock,
        )
        self._income = ProcessIncomeDueUseCase(
            repository,
            logger=self._logger,
            id_factory=id_factory,
            clock=clock,
        )
        self._transactions = ListTransactionsUseCase(
            repository,
            logger=self._logger,
        )
        self._periods = GetPayPeriodsUseCase(repository, logger=self._logger)
        self._paycheck = AddPaycheckUseCase(
            repository,
            logger=self._logger,
            id_factory=id_factory,
            clock=clock,
        )
        self._goals = ContributeToGoalUseCase(repository, logger=self._logger)

    def post_transaction(self, user_id: str, payload: Payload) -> dict:
        def action():
            request = TransactionPayload.model_validate(payload or {})
            return self._post.execute(user_id, request.to_request())

        return self._handle("post_transaction", user_id, action)

    def edit_transaction(
        self,
        user_id: str,
        transaction_id: str,
        payload: Payload,
    ) -> dict:
        def action():
            changes = TransactionChangesPayload.model_validate(payload or {})
            return self._edit.execute(
                user_id,
                transaction_id,
                changes.to_changes(),
            )

        return self._handle("edit_transaction", user_id, action)

    def delete_transaction(self, user_id: str, transaction_id: str) -> dict:
        def action():
            posted = self._delete.execute(user_id, transaction_id)
            return {
                "deleted_id": posted.transaction.id,
                "balances": posted.balances,
            }

        return self._handle("delete_transaction", user_id, action)

    def compute_overview(self, user_id: str, payload: Payload = None) -> dict:
        def action():
            params = AsOfPayload.model_validate(payload or {})
            return self._overview.execute(user_id, params.today)

        return self._handle("compute_overview", user_id, action)

    def process_recurring_due(
        self,
        user_id: str,
        payload: Payload = None,
    ) -> dict:
        def action():
            params = AsOfPayload.model_validate(payload or {})
            return self._recurring.execute(user_id, params.today)

        return self._handle("process_recurring_due", user_id, action)

    def process_income_due(self, user_id: str, payload: Payload = None) -> dict:
        def action():
            params = AsOfPayload.model_validate(payload or {})
            return self._income.execute(user_id, params.today)

        return self._handle("process_income_due", user_id, action)

    def list_transactions(self, user_id: str, payload: Payload = None) -> dict:
        def action():
            query = TransactionQueryPayload.model_validate(payload or {})
            return self._transactions.execute(user_id, query.to_query())

        return self._handle("list_transactions", user_id, action)

    def list_pay_periods(self, user_id: str, payload: Payload = None) -> dict:
        def action():
            params = PeriodsPayload.model_validate(payload or {})
            return self._periods.execute(
                user_id,
                params.limit,
                before=params.before,
            )

        return self._handle("list_pay_periods", user_id, action)

    def get_pay_period(self, user_id: str, period_id: str) -> dict:
        def action():
            return self._periods.get(user_id, period_id)

        return self._handle("get_pay_period", user_id, action)

    def add_paycheck(
        self,
        user_id: str,
        source_id: str,
        payload: Payload = None,
    ) -> dict:
        def action():
            params = PaycheckPayload.model_validate(payload or {})
            return self._paycheck.execute(
                user_id,
                source_id,
                pay_date=params.date,
                deposits=params.to_deposits(),
            )

        return self._handle("add_paycheck", user_id, action)

    def contribute_to_goal(
        self,
        user_id: str,
        goal_id: str,
        payload: Payload,
    ) -> dict:
        def action():
            params = ContributionPayload.model_validate(payload or {})
            return self._goals.execute(user_id, goal_id, params.amount)

        return self._handle("contribute_to_goal", user_id, action)

    def _handle(self, operation: str, user_id: str, action) -> dict:
        """Run an operation and map its outcome to an envelope."""
        try:
            if not user_id:
                raise ValidationError("user_id is required")
            data = to_jsonable(action())
        except PayloadValidationError as exc:
            self._usage_logger.info(
                f"{operation} user={user_id} {ValidationError.code}"
            )
            return error_response(ValidationError.code, describe_errors(exc))
        except InternalError as exc:
            self._logger.error(f"{operation} failed for {user_id}: {exc}")
            self._usage_logger.info(f"{operation} user={user_id} {exc.code}")
            return error_response(exc.code, GENERIC_ERROR_MESSAGE)
        except LedgerError as exc:
            self._usage_logger.info(f"{operation} user={user_id} {exc.code}")
            return error_response(exc.code, exc.message)
        except Exception:
            self._logger.exception(
                f"Unexpected error in {operation} for {user_id}"
            )
            self._usage_logger.info(
                f"{operation} user={user_id} {InternalError.code}"
            )
            return error_response(InternalError.code, GENERIC_ERROR_MESSAGE)

        self._usage_logger.info(f"{operation} user={user_id} OK")
        return success_response(data)


__all__ = ["LedgerApi"]
