"""Use case for paging through ledger transactions."""

from dataclasses import replace

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.domain.constants import MAX_TRANSACTIONS_PAGE
from payledger.domain.errors import ValidationError
from payledger.domain.models import TransactionPage, TransactionQuery
from payledger.infrastructure.logging.logger import get_app_logger


class ListTransactionsUseCase:
    """Return transactions newest first with a has-more flag."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, query: TransactionQuery) -> TransactionPage:
        """Return one page of transactions.

        Args:
            user_id: Verified owner of the ledger.
            query: Filters; ``limit`` is capped at the page maximum.

        Returns:
            TransactionPage: Matching transactions and paging flags.
        """
        if query.limit < 1 or query.offset < 0:
            raise ValidationError("limit must be positive and offset >= 0")
        if (
            query.start_date is not None
            and query.end_date is not None
            and query.start_date > query.end_date
        ):
            raise ValidationError("start_date must not be after end_date")
        query = replace(query, limit=min(query.limit, MAX_TRANSACTIONS_PAGE))

        with self._repository.unit_of_work(user_id) as uow:
            rows = uow.list_transactions(query)

        has_more = len(rows) > query.limit
        self._logger.debug(
            f"Listed {min(len(rows), query.limit)} transactions "
            f"offset={query.offset}"
        )
        return TransactionPage(
            transactions=rows[: query.limit],
            limit=query.limit,
            offset=query.offset,
            has_more=has_more,
        )


__all__ = ["ListTransactionsUseCase"]
