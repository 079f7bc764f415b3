"""Shared steps for applying and reversing ledger transactions.

These helpers run inside an open unit of work; they never commit. Use
cases compose them so that a post, an edit, a delete and a catch-up
occurrence all touch balances, period summaries, bill markers and linked
goals the same way.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

from payledger.application.ports.ledger_repository import (
    LedgerUnitOfWorkPort,
)
from payledger.domain.constants import AccountRole, TransactionKind
from payledger.domain.errors import NotFoundError, ValidationError
from payledger.domain.models import (
    Account,
    PayPeriod,
    PaySettings,
    Transaction,
)
from payledger.domain.services.effects import balance_effect, summary_delta


def new_transaction_id() -> str:
    """Return a fresh transaction identifier."""
    return f"txn_{uuid4().hex}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def require_settings(uow: LedgerUnitOfWorkPort) -> PaySettings:
    """Return the user's pay settings.

    Raises:
        ValidationError: If the user has not configured a pay schedule.
    """
    settings = uow.get_settings()
    if settings is None:
        raise ValidationError("Pay settings are not configured")
    return settings


def require_account(uow: LedgerUnitOfWorkPort, account_id: str) -> Account:
    """Return an account or raise NotFoundError."""
    account = uow.get_account(account_id)
    if account is None:
        raise NotFoundError(f"Account not found: {account_id}")
    return account


def apply_balance_effects(
    uow: LedgerUnitOfWorkPort,
    transaction: Transaction,
    source: Account | None,
    destination: Account | None = None,
    sign: int = 1,
    logger=None,
) -> dict[str, Decimal]:
    """Increment the balances touched by a transaction.

    Args:
        uow: Open unit of work.
        transaction: Transaction whose kind and amount drive the effect.
        source: Source account, or None when it no longer exists.
        destination: Destination account for dual-account kinds.
        sign: ``1`` to apply, ``-1`` to reverse.
        logger: Logger used to report accounts missing during a reversal.

    Returns:
        dict[str, Decimal]: Account id to balance after the increment.
    """
    balances: dict[str, Decimal] = {}
    sides = [(source, transaction.source_account_id, AccountRole.SOURCE)]
    if transaction.destination_account_id:
        sides.append(
            (
                destination,
                transaction.destination_account_id,
                AccountRole.DESTINATION,
            )
        )

    for account, account_id, role in sides:
        if account is None:
            if logger is not None:
                logger.warning(
                    f"Account {account_id} of transaction {transaction.id} "
                    "no longer exists; balance left unchanged"
                )
            continue
        multiplier = balance_effect(transaction.kind, account.kind, role)
        delta = transaction.amount * multiplier * sign
        balances[account.id] = uow.increment_balance(account.id, delta)
        if account.is_asset:
            uow.sync_linked_goals(account.id)
    return balances


def record_posting(
    uow: LedgerUnitOfWorkPort,
    transaction: Transaction,
    period: PayPeriod,
    source: Account,
    destination: Account | None = None,
) -> dict[str, Decimal]:
    """Apply every effect of a freshly inserted transaction.

    Returns:
        dict[str, Decimal]: Balances of the touched accounts.
    """
    uow.ensure_period_summary(period)
    balances = apply_balance_effects(uow, transaction, source, destination)
    uow.increment_summary(
        period.id,
        summary_delta(transaction.kind, transaction.amount),
    )
    mark_bill_paid(uow, transaction)
    return balances


def reverse_posting(
    uow: LedgerUnitOfWorkPort,
    transaction: Transaction,
    logger=None,
) -> dict[str, Decimal]:
    """Undo the balance and summary effects of a stored transaction.

    The stored kind, amount and account kinds are used, so the reversal
    is exact even if the transaction is edited afterwards.
    """
    source = uow.get_account(transaction.source_account_id)
    destination = None
    if transaction.destination_account_id:
        destination = uow.get_account(transaction.destination_account_id)
    balances = apply_balance_effects(
        uow,
        transaction,
        source,
        destination,
        sign=-1,
        logger=logger,
    )
    uow.increment_summary(
        transaction.pay_period_id,
        summary_delta(transaction.kind, -transaction.amount, count=-1),
    )
    return balances


def mark_bill_paid(uow: LedgerUnitOfWorkPort, transaction: Transaction) -> None:
    """Move the bill's last paid date forward for a bill payment."""
    if transaction.kind is not TransactionKind.BILL_PAYMENT:
        return
    if not transaction.bill_id:
        return
    bill = uow.get_bill(transaction.bill_id)
    if bill is None:
        return
    if bill.last_paid_date is None or bill.last_paid_date < transaction.date:
        uow.set_bill_last_paid(bill.id, transaction.date)


def restore_bill_marker(
    uow: LedgerUnitOfWorkPort,
    transaction: Transaction,
) -> None:
    """Roll a bill's last paid date back after its payment went away.

    Must run after the payment row was deleted or rewritten so the latest
    remaining payment is found.
    """
    if transaction.kind is not TransactionKind.BILL_PAYMENT:
        return
    if not transaction.bill_id:
        return
    bill = uow.get_bill(transaction.bill_id)
    if bill is None or bill.last_paid_date != transaction.date:
        return
    uow.set_bill_last_paid(
        bill.id,
        uow.latest_bill_payment_date(bill.id),
    )


def default_clock() -> date:
    return date.today()


__all__ = [
    "new_transaction_id",
    "utc_now",
    "require_settings",
    "require_account",
    "apply_balance_effects",
    "record_posting",
    "reverse_posting",
    "mark_bill_paid",
    "restore_bill_marker",
    "default_clock",
]
