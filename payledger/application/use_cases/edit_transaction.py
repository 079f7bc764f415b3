"""Use case for editing a posted transaction."""

from dataclasses import replace

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.application.use_cases.ledger_effects import (
    apply_balance_effects,
    mark_bill_paid,
    require_account,
    require_settings,
    restore_bill_marker,
    utc_now,
)
from payledger.domain.constants import DUAL_ACCOUNT_KINDS
from payledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from payledger.domain.models import (
    PostedTransaction,
    Transaction,
    TransactionChanges,
)
from payledger.domain.services.effects import summary_delta
from payledger.domain.services.pay_period import period_for_settings
from payledger.domain.services.validation import (
    validate_account_pairing,
    validate_amount,
)
from payledger.infrastructure.logging.logger import get_app_logger


class EditTransactionUseCase:
    """Reverse a transaction's old effect and apply its new one atomically."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        transaction_id: str,
        changes: TransactionChanges,
    ) -> PostedTransaction:
        """Apply a partial update to a single-account transaction.

        Args:
            user_id: Verified owner of the ledger.
            transaction_id: Transaction to edit.
            changes: New values for the editable fields.

        Returns:
            PostedTransaction: Updated transaction and source balance.

        Raises:
            NotFoundError: If the transaction, its account or a new bill is
                unknown.
            ConflictError: If the transaction is a transfer or card payment.
            ValidationError: If the new values are invalid.
        """
        with self._repository.unit_of_work(user_id) as uow:
            current = uow.get_transaction(transaction_id)
            if current is None:
                raise NotFoundError(f"Transaction not found: {transaction_id}")
            if current.kind in DUAL_ACCOUNT_KINDS:
                raise ConflictError(
                    f"{current.kind.value} transactions cannot be edited; "
                    "delete and re-create them instead"
                )

            settings = require_settings(uow)
            updated = self._apply_changes(current, changes)
            if updated.bill_id and updated.bill_id != current.bill_id:
                if uow.get_bill(updated.bill_id) is None:
                    raise NotFoundError(f"Bill not found: {updated.bill_id}")

            source = require_account(uow, current.source_account_id)
            validate_account_pairing(updated.kind, source, None)

            period = period_for_settings(settings, updated.date)
            updated = replace(
                updated,
                pay_period_id=period.id,
                updated_at=utc_now(),
            )

            apply_balance_effects(uow, current, source, sign=-1)
            uow.update_transaction(updated)
            restore_bill_marker(uow, current)

            uow.ensure_period_summary(period)
            self._move_summary(uow, current, updated)
            balances = apply_balance_effects(uow, updated, source)
            mark_bill_paid(uow, updated)

        self._logger.info(
            f"Edited transaction {transaction_id} "
            f"period={current.pay_period_id}->{updated.pay_period_id}"
        )
        return PostedTransaction(transaction=updated, balances=balances)

    @staticmethod
    def _apply_changes(
        current: Transaction,
        changes: TransactionChanges,
    ) -> Transaction:
        kind = changes.kind or current.kind
        if kind in DUAL_ACCOUNT_KINDS:
            raise ValidationError(
                f"Cannot change a transaction into a {kind.value}"
            )

        amount = current.amount if changes.amount is None else changes.amount
        validate_amount(amount)

        description = current.description
        if changes.description is not None:
            description = changes.description.strip()
            if not description:
                raise ValidationError("description is required")

        bill_id = current.bill_id
        if "bill_id" in changes.set_fields:
            bill_id = changes.bill_id or None
        category = current.category
        if "category" in changes.set_fields:
            category = changes.category or None

        return replace(
            current,
            date=changes.date or current.date,
            amount=amount,
            description=description,
            kind=kind,
            bill_id=bill_id,
            category=category,
        )

    @staticmethod
    def _move_summary(uow, current: Transaction, updated: Transaction) -> None:
        # The count only moves when the period changes.
        removed = summary_delta(current.kind, -current.amount, count=-1)
        added = summary_delta(updated.kind, updated.amount)
        if current.pay_period_id == updated.pay_period_id:
            combined = removed + added
            if not combined.is_zero:
                uow.increment_summary(updated.pay_period_id, combined)
            return
        uow.increment_summary(current.pay_period_id, removed)
        uow.increment_summary(updated.pay_period_id, added)


__all__ = ["EditTransactionUseCase"]
