"""Balance and summary effects of ledger transactions.

The sign convention depends on both the transaction kind and the kind of
account it touches:

| kind         | source                      | destination     |
|--------------|-----------------------------|-----------------|
| INCOME       | ASSET +1                    |                 |
| PURCHASE     | ASSET -1, LIABILITY +1      |                 |
| BILL_PAYMENT | ASSET -1                    |                 |
| TRANSFER     | -1                          | +1              |
| CARD_PAYMENT | ASSET -1                    | LIABILITY -1    |
"""

from decimal import Decimal

from payledger.domain.constants import (
    AccountKind,
    AccountRole,
    DUAL_ACCOUNT_KINDS,
    TransactionKind,
)
from payledger.domain.errors import ValidationError
from payledger.domain.models.periods import SummaryDelta

_ASSET = AccountKind.ASSET
_LIABILITY = AccountKind.LIABILITY
_SOURCE = AccountRole.SOURCE
_DESTINATION = AccountRole.DESTINATION

_EFFECTS: dict[tuple[TransactionKind, AccountRole, AccountKind], int] = {
    (TransactionKind.INCOME, _SOURCE, _ASSET): 1,
    (TransactionKind.PURCHASE, _SOURCE, _ASSET): -1,
    (TransactionKind.PURCHASE, _SOURCE, _LIABILITY): 1,
    (TransactionKind.BILL_PAYMENT, _SOURCE, _ASSET): -1,
    (TransactionKind.TRANSFER, _SOURCE, _ASSET): -1,
    (TransactionKind.TRANSFER, _SOURCE, _LIABILITY): -1,
    (TransactionKind.TRANSFER, _DESTINATION, _ASSET): 1,
    (TransactionKind.TRANSFER, _DESTINATION, _LIABILITY): 1,
    (TransactionKind.CARD_PAYMENT, _SOURCE, _ASSET): -1,
    (TransactionKind.CARD_PAYMENT, _DESTINATION, _LIABILITY): -1,
}

_SUMMARY_FIELDS: dict[TransactionKind, str] = {
    TransactionKind.INCOME: "income_total",
    TransactionKind.BILL_PAYMENT: "bills_total",
    TransactionKind.PURCHASE: "discretionary_total",
}


def balance_effect(
    kind: TransactionKind,
    account_kind: AccountKind,
    role: AccountRole = AccountRole.SOURCE,
) -> int:
    """Return the signed multiplier a transaction applies to an account.

    Args:
        kind: Transaction kind.
        account_kind: Kind of the touched account.
        role: Whether the account is the source or the destination.

    Returns:
        int: ``+1`` or ``-1``.

    Raises:
        ValidationError: If the combination is not allowed.
    """
    try:
        return _EFFECTS[(kind, role, account_kind)]
    except KeyError as exc:
        raise ValidationError(
            f"{kind.value} cannot use a {account_kind.value} account "
            f"as {role.value}"
        ) from exc


def is_supported(
    kind: TransactionKind,
    account_kind: AccountKind,
    role: AccountRole = AccountRole.SOURCE,
) -> bool:
    return (kind, role, account_kind) in _EFFECTS


def balance_deltas(
    kind: TransactionKind,
    amount: Decimal,
    source_kind: AccountKind,
    destination_kind: AccountKind | None = None,
) -> tuple[Decimal, Decimal | None]:
    """Return the signed deltas for the source and destination accounts.

    Args:
        kind: Transaction kind.
        amount: Non-negative transaction amount.
        source_kind: Kind of the source account.
        destination_kind: Kind of the destination account, if any.

    Returns:
        tuple[Decimal, Decimal | None]: Source delta and destination delta
        (None for single-account kinds).
    """
    source_delta = amount * balance_effect(kind, source_kind, _SOURCE)
    if kind not in DUAL_ACCOUNT_KINDS:
        return source_delta, None
    if destination_kind is None:
        raise ValidationError(f"{kind.value} requires a destination account")
    destination_delta = amount * balance_effect(
        kind,
        destination_kind,
        _DESTINATION,
    )
    return source_delta, destination_delta


def summary_field(kind: TransactionKind) -> str | None:
    """Return the period total a kind feeds, or None for transfers."""
    return _SUMMARY_FIELDS.get(kind)


def summary_delta(
    kind: TransactionKind,
    amount: Decimal,
    count: int = 1,
) -> SummaryDelta:
    """Return the summary increment for one transaction.

    Args:
        kind: Transaction kind.
        amount: Transaction amount (negative to reverse).
        count: Transaction count change.

    Returns:
        SummaryDelta: Delta touching at most one total plus the count.
    """
    field_name = summary_field(kind)
    if field_name is None:
        return SummaryDelta(transaction_count=count)
    return SummaryDelta(**{field_name: amount, "transaction_count": count})


__all__ = [
    "balance_effect",
    "is_supported",
    "balance_deltas",
    "summary_field",
    "summary_delta",
]
