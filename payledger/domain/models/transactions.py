"""Domain models for ledger transactions."""

from dataclasses import dataclass, field
import datetime as dt
from datetime import date, datetime
from decimal import Decimal

from payledger.domain.constants import OriginKind, TransactionKind


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction tagged with its owning pay period.

    Attributes:
        id: Transaction identifier.
        date: Date the transaction applies to.
        amount: Non-negative amount.
        description: Free-text description.
        kind: Transaction kind driving balance and summary effects.
        source_account_id: Account the transaction is applied to.
        pay_period_id: Start date (ISO) of the owning pay period.
        destination_account_id: Second account for transfers and card
            payments.
        bill_id: Bill paid by a bill payment.
        category: Optional spending category.
        origin_kind: Manual entry, recurring definition or income source.
        origin_id: Identifier of the recurring definition or income source.
    """

    id: str
    date: date
    amount: Decimal
    description: str
    kind: TransactionKind
    source_account_id: str
    pay_period_id: str
    destination_account_id: str | None = None
    bill_id: str | None = None
    category: str | None = None
    origin_kind: OriginKind = OriginKind.MANUAL
    origin_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TransactionRequest:
    """Validated input for posting a manual transaction."""

    date: date
    amount: Decimal
    description: str
    kind: TransactionKind
    source_account_id: str | None = None
    destination_account_id: str | None = None
    bill_id: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class TransactionChanges:
    """Partial update for an editable transaction.

    Fields left as None keep their current value; ``set_fields`` lists the
    optional fields explicitly provided so bill_id and category can be
    cleared.
    """

    date: dt.date | None = None
    amount: Decimal | None = None
    description: str | None = None
    kind: TransactionKind | None = None
    bill_id: str | None = None
    category: str | None = None
    set_fields: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class PostedTransaction:
    """Result of applying a transaction.

    Attributes:
        transaction: Stored transaction.
        balances: Account id to balance after the write.
    """

    transaction: Transaction
    balances: dict[str, Decimal]


@dataclass(frozen=True)
class TransactionQuery:
    """Filters for listing transactions."""

    pay_period_id: str | None = None
    account_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class TransactionPage:
    """Page of transactions, newest first."""

    transactions: list[Transaction]
    limit: int
    offset: int
    has_more: bool


__all__ = [
    "Transaction",
    "TransactionRequest",
    "TransactionChanges",
    "PostedTransaction",
    "TransactionQuery",
    "TransactionPage",
]
