"""Tests for transaction request validation."""

from datetime import date
from decimal import Decimal

import pytest

from payledger.domain.constants import AccountKind, TransactionKind
from payledger.domain.errors import ValidationError
from payledger.domain.models import Account, TransactionRequest
from payledger.domain.services.validation import (
    validate_account_pairing,
    validate_request_fields,
)

CHECKING = Account("checking", "Checking", AccountKind.ASSET, Decimal("0"))
SAVINGS = Account("savings", "Savings", AccountKind.ASSET, Decimal("0"))
CARD = Account("card", "Visa", AccountKind.LIABILITY, Decimal("0"))


def _request(**overrides):
    values = {
        "date": date(2025, 1, 20),
        "amount": Decimal("10"),
        "description": "Coffee",
        "kind": TransactionKind.PURCHASE,
        "source_account_id": "checking",
    }
    values.update(overrides)
    return TransactionRequest(**values)


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": Decimal("-1")},
        {"description": "   "},
        {"kind": TransactionKind.TRANSFER},
        {
            "kind": TransactionKind.TRANSFER,
            "destination_account_id": "checking",
        },
        {"destination_account_id": "savings"},
    ],
)
def test_invalid_request_fields(overrides):
    """Malformed requests are rejected before any lookup."""
    with pytest.raises(ValidationError):
        validate_request_fields(_request(**overrides))


def test_valid_transfer_request_passes():
    """A transfer with a distinct destination is accepted."""
    validate_request_fields(
        _request(
            kind=TransactionKind.TRANSFER,
            destination_account_id="savings",
        )
    )


def test_card_payment_requires_liability_destination():
    """Card payments must target a liability account."""
    with pytest.raises(ValidationError):
        validate_account_pairing(TransactionKind.CARD_PAYMENT, CHECKING, SAVINGS)

    validate_account_pairing(TransactionKind.CARD_PAYMENT, CHECKING, CARD)


def test_income_into_liability_is_rejected():
    """Income must land in an asset account."""
    with pytest.raises(ValidationError):
        validate_account_pairing(TransactionKind.INCOME, CARD, None)


def test_same_account_pairing_is_rejected():
    """Source and destination must differ."""
    with pytest.raises(ValidationError):
        validate_account_pairing(TransactionKind.TRANSFER, CHECKING, CHECKING)
