"""Domain enums and constants for the pay-period ledger."""

from enum import Enum


class AccountKind(str, Enum):
    """Balance semantics of an account."""

    ASSET = "asset"
    LIABILITY = "liability"


class TransactionKind(str, Enum):
    """Supported ledger transaction kinds."""

    INCOME = "income"
    PURCHASE = "purchase"
    BILL_PAYMENT = "bill_payment"
    TRANSFER = "transfer"
    CARD_PAYMENT = "card_payment"


class AccountRole(str, Enum):
    """Side of a transaction an account sits on."""

    SOURCE = "source"
    DESTINATION = "destination"


class PayFrequency(str, Enum):
    """Pay-period frequencies."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"


class RecurrenceFrequency(str, Enum):
    """Frequencies supported by recurring definitions."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class OriginKind(str, Enum):
    """Where a ledger transaction came from."""

    MANUAL = "manual"
    RECURRING = "recurring"
    INCOME = "income"


DUAL_ACCOUNT_KINDS = (TransactionKind.TRANSFER, TransactionKind.CARD_PAYMENT)

RECURRING_KINDS = (TransactionKind.INCOME, TransactionKind.PURCHASE)

INCOME_CATEGORY = "Income"

MAX_TRANSACTIONS_PAGE = 100
DEFAULT_TRANSACTIONS_PAGE = 50
MAX_PERIODS_PAGE = 12
DEFAULT_PERIODS_PAGE = 3
RECENT_TRANSACTIONS_DAYS = 7
RECENT_TRANSACTIONS_LIMIT = 50


__all__ = [
    "AccountKind",
    "TransactionKind",
    "AccountRole",
    "PayFrequency",
    "RecurrenceFrequency",
    "OriginKind",
    "DUAL_ACCOUNT_KINDS",
    "RECURRING_KINDS",
    "INCOME_CATEGORY",
    "MAX_TRANSACTIONS_PAGE",
    "DEFAULT_TRANSACTIONS_PAGE",
    "MAX_PERIODS_PAGE",
    "DEFAULT_PERIODS_PAGE",
    "RECENT_TRANSACTIONS_DAYS",
    "RECENT_TRANSACTIONS_LIMIT",
]
