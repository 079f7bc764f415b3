"""Tests for the balance-effect matrix and summary deltas."""

from decimal import Decimal

import pytest

from payledger.domain.constants import AccountKind, AccountRole, TransactionKind
from payledger.domain.errors import ValidationError
from payledger.domain.models import SummaryDelta
from payledger.domain.services.effects import (
    balance_deltas,
    balance_effect,
    summary_delta,
)

ASSET = AccountKind.ASSET
LIABILITY = AccountKind.LIABILITY


@pytest.mark.parametrize(
    ("kind", "account_kind", "role", "expected"),
    [
        (TransactionKind.INCOME, ASSET, AccountRole.SOURCE, 1),
        (TransactionKind.PURCHASE, ASSET, AccountRole.SOURCE, -1),
        (TransactionKind.PURCHASE, LIABILITY, AccountRole.SOURCE, 1),
        (TransactionKind.BILL_PAYMENT, ASSET, AccountRole.SOURCE, -1),
        (TransactionKind.TRANSFER, ASSET, AccountRole.SOURCE, -1),
        (TransactionKind.TRANSFER, ASSET, AccountRole.DESTINATION, 1),
        (TransactionKind.CARD_PAYMENT, ASSET, AccountRole.SOURCE, -1),
        (TransactionKind.CARD_PAYMENT, LIABILITY, AccountRole.DESTINATION, -1),
    ],
)
def test_balance_effect_matrix(kind, account_kind, role, expected):
    """Each supported combination has a fixed sign."""
    assert balance_effect(kind, account_kind, role) == expected


@pytest.mark.parametrize(
    ("kind", "account_kind"),
    [
        (TransactionKind.INCOME, LIABILITY),
        (TransactionKind.BILL_PAYMENT, LIABILITY),
        (TransactionKind.CARD_PAYMENT, LIABILITY),
    ],
)
def test_unsupported_source_kinds_raise(kind, account_kind):
    """Income, bill payments and card payments need an asset source."""
    with pytest.raises(ValidationError):
        balance_effect(kind, account_kind)


def test_transfer_between_assets_has_zero_net_effect():
    """A transfer moves money without changing total assets."""
    source_delta, destination_delta = balance_deltas(
        TransactionKind.TRANSFER,
        Decimal("75.00"),
        ASSET,
        ASSET,
    )

    assert source_delta == Decimal("-75.00")
    assert destination_delta == Decimal("75.00")
    assert source_delta + destination_delta == 0


def test_card_payment_reduces_both_balances():
    """Paying a card lowers the cash balance and the debt."""
    source_delta, destination_delta = balance_deltas(
        TransactionKind.CARD_PAYMENT,
        Decimal("40"),
        ASSET,
        LIABILITY,
    )

    assert source_delta == Decimal("-40")
    assert destination_delta == Decimal("-40")


def test_dual_kind_without_destination_raises():
    """Transfers require a destination account kind."""
    with pytest.raises(ValidationError):
        balance_deltas(TransactionKind.TRANSFER, Decimal("1"), ASSET)


def test_summary_delta_routes_to_matching_total():
    """Each kind feeds one total; transfers only move the count."""
    assert summary_delta(TransactionKind.INCOME, Decimal("10")) == SummaryDelta(
        income_total=Decimal("10"),
        transaction_count=1,
    )
    assert summary_delta(
        TransactionKind.BILL_PAYMENT,
        Decimal("5"),
    ).bills_total == Decimal("5")
    assert summary_delta(
        TransactionKind.PURCHASE,
        Decimal("-5"),
        count=-1,
    ) == SummaryDelta(discretionary_total=Decimal("-5"), transaction_count=-1)
    assert summary_delta(
        TransactionKind.CARD_PAYMENT,
        Decimal("99"),
    ) == SummaryDelta(transaction_count=1)


def test_summary_delta_negate_cancels():
    """A delta plus its negation is zero."""
    delta = summary_delta(TransactionKind.INCOME, Decimal("12.50"))

    assert (delta + delta.negate()).is_zero
