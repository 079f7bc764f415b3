"""Use case for deleting a transaction and reversing its effects."""

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.application.use_cases.ledger_effects import (
    restore_bill_marker,
    reverse_posting,
)
from payledger.domain.errors import NotFoundError
from payledger.domain.models import PostedTransaction
from payledger.infrastructure.logging.logger import get_app_logger


class DeleteTransactionUseCase:
    """Delete a transaction after applying the exact inverse of its effect."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, transaction_id: str) -> PostedTransaction:
        """Reverse and delete a transaction in one unit of work.

        Args:
            user_id: Verified owner of the ledger.
            transaction_id: Transaction to delete.

        Returns:
            PostedTransaction: The deleted transaction and the balances of
            the accounts it touched after the reversal.

        Raises:
            NotFoundError: If the transaction does not exist.
        """
        with self._repository.unit_of_work(user_id) as uow:
            transaction = uow.get_transaction(transaction_id)
            if transaction is None:
                raise NotFoundError(f"Transaction not found: {transaction_id}")
            balances = reverse_posting(uow, transaction, logger=self._logger)
            uow.delete_transaction(transaction.id)
            restore_bill_marker(uow, transaction)

        self._logger.info(
            f"Deleted {transaction.kind.value} {transaction.id} "
            f"amount={transaction.amount} period={transaction.pay_period_id}"
        )
        return PostedTransaction(transaction=transaction, balances=balances)


__all__ = ["DeleteTransactionUseCase"]
