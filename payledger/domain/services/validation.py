"""Domain validation for ledger requests."""

from decimal import Decimal

from payledger.domain.constants import (
    AccountKind,
    DUAL_ACCOUNT_KINDS,
    TransactionKind,
)
from payledger.domain.errors import ValidationError
from payledger.domain.models.accounts import Account
from payledger.domain.models.transactions import TransactionRequest
from payledger.domain.services.effects import balance_deltas


def validate_amount(amount: Decimal) -> None:
    if amount is None or amount < 0:
        raise ValidationError("amount must be a non-negative number")


def validate_request_fields(request: TransactionRequest) -> None:
    """Check request fields that do not need any lookup.

    Raises:
        ValidationError: On a missing description, negative amount or
            inconsistent destination.
    """
    validate_amount(request.amount)
    if not request.description or not request.description.strip():
        raise ValidationError("description is required")
    if request.kind in DUAL_ACCOUNT_KINDS:
        if not request.destination_account_id:
            raise ValidationError(
                f"destination_account_id is required for {request.kind.value}"
            )
        if request.destination_account_id == request.source_account_id:
            raise ValidationError(
                "destination account must differ from the source account"
            )
    elif request.destination_account_id:
        raise ValidationError(
            f"destination_account_id is not allowed for {request.kind.value}"
        )


def validate_account_pairing(
    kind: TransactionKind,
    source: Account,
    destination: Account | None,
) -> None:
    """Check the account kinds against the balance-effect matrix.

    Raises:
        ValidationError: If the kinds cannot be combined.
    """
    if destination is not None and destination.id == source.id:
        raise ValidationError(
            "destination account must differ from the source account"
        )
    if (
        kind is TransactionKind.CARD_PAYMENT
        and destination is not None
        and destination.kind is not AccountKind.LIABILITY
    ):
        raise ValidationError(
            "card payment destination must be a liability account"
        )
    balance_deltas(
        kind,
        Decimal("0"),
        source.kind,
        destination.kind if destination is not None else None,
    )


__all__ = [
    "validate_amount",
    "validate_request_fields",
    "validate_account_pairing",
]
