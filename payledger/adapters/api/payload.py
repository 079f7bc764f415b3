"""Request payload models for the ledger API.

Payloads arrive as plain dicts. Each operation validates its payload with
one of the pydantic models below and converts it into the domain request
the use case takes. Validation failures surface as
``pydantic.ValidationError``; the facade reports them as
``VALIDATION_ERROR`` envelopes using ``describe_errors``.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    model_validator,
)

from payledger.domain.constants import (
    DEFAULT_PERIODS_PAGE,
    DEFAULT_TRANSACTIONS_PAGE,
    TransactionKind,
)
from payledger.domain.models import (
    IncomeDeposit,
    TransactionChanges,
    TransactionQuery,
    TransactionRequest,
)
from payledger.utils.decimal_utils import to_money

CLEARABLE_FIELDS = frozenset({"bill_id", "category"})


def _reject_bool(value):
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _normalize_kind(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


Money = Annotated[
    Decimal,
    BeforeValidator(_reject_bool),
    AfterValidator(to_money),
]
NonNegativeMoney = Annotated[
    Decimal,
    Field(ge=0),
    BeforeValidator(_reject_bool),
    AfterValidator(to_money),
]
Description = Annotated[str, StringConstraints(min_length=1, max_length=255)]
Kind = Annotated[TransactionKind, BeforeValidator(_normalize_kind)]
Count = Annotated[int, BeforeValidator(_reject_bool)]
OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[dt.date | None, BeforeValidator(_blank_to_none)]


class PayloadModel(BaseModel):
    """Base for request payloads: strings are stripped before checks."""

    model_config = ConfigDict(str_strip_whitespace=True)


class TransactionPayload(PayloadModel):
    """Body of a manual transaction post."""

    date: dt.date
    amount: NonNegativeMoney
    description: Description
    kind: Kind
    source_account_id: OptionalText = None
    destination_account_id: OptionalText = None
    bill_id: OptionalText = None
    category: OptionalText = None

    def to_request(self) -> TransactionRequest:
        return TransactionRequest(**self.model_dump())


class TransactionChangesPayload(PayloadModel):
    """Body of a transaction edit.

    Only editable fields are accepted. ``bill_id`` and ``category`` may be
    sent as null to clear them.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    date: dt.date | None = None
    amount: NonNegativeMoney | None = None
    description: Description | None = None
    kind: Kind | None = None
    bill_id: OptionalText = None
    category: OptionalText = None

    @model_validator(mode="after")
    def require_a_change(self) -> "TransactionChangesPayload":
        if not self.model_fields_set:
            raise ValueError("No fields to update")
        return self

    def to_changes(self) -> TransactionChanges:
        return TransactionChanges(
            date=self.date,
            amount=self.amount,
            description=self.description,
            kind=self.kind,
            bill_id=self.bill_id,
            category=self.category,
            set_fields=frozenset(self.model_fields_set & CLEARABLE_FIELDS),
        )


class TransactionQueryPayload(PayloadModel):
    """Filters of a transaction listing."""

    pay_period_id: OptionalText = None
    account_id: OptionalText = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    limit: Count = DEFAULT_TRANSACTIONS_PAGE
    offset: Count = 0

    def to_query(self) -> TransactionQuery:
        return TransactionQuery(**self.model_dump())


class PeriodsPayload(PayloadModel):
    limit: Count = DEFAULT_PERIODS_PAGE
    before: OptionalDate = None


class AsOfPayload(PayloadModel):
    """Optional reference date of catch-up and overview calls."""

    today: OptionalDate = None


class DepositPayload(PayloadModel):
    account_id: str = Field(min_length=1)
    amount: NonNegativeMoney

    def to_deposit(self) -> IncomeDeposit:
        return IncomeDeposit(account_id=self.account_id, amount=self.amount)


class PaycheckPayload(PayloadModel):
    """Manual paycheck: pay date and an optional deposit override."""

    date: OptionalDate = None
    deposits: Annotated[
        list[DepositPayload],
        Field(min_length=1),
    ] | None = None

    def to_deposits(self) -> list[IncomeDeposit] | None:
        if self.deposits is None:
            return None
        return [deposit.to_deposit() for deposit in self.deposits]


class ContributionPayload(PayloadModel):
    """Goal contribution; negative amounts withdraw."""

    amount: Money


def describe_errors(exc: ValidationError) -> str:
    """Flatten pydantic errors into one readable message.

    Args:
        exc: Validation error raised by a payload model.

    Returns:
        str: ``field: reason`` pairs joined by semicolons.
    """
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "payload"
        details.append(f"{field}: {error['msg']}")
    return "; ".join(details)


__all__ = [
    "CLEARABLE_FIELDS",
    "TransactionPayload",
    "TransactionChangesPayload",
    "TransactionQueryPayload",
    "PeriodsPayload",
    "AsOfPayload",
    "DepositPayload",
    "PaycheckPayload",
    "ContributionPayload",
    "describe_errors",
]
