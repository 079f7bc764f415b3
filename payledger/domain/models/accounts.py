"""Domain models for ledger accounts."""

from dataclasses import dataclass
from decimal import Decimal

from payledger.domain.constants import AccountKind


@dataclass(frozen=True)
class Account:
    """Account whose balance is owned by the ledger engine.

    Attributes:
        id: Account identifier.
        name: Display name.
        kind: ASSET (money held) or LIABILITY (money owed).
        balance: Signed balance; for liabilities, the amount owed.
        account_type: Display subtype such as checking or credit_card.
        credit_limit: Credit limit for liability accounts.
        apr: Optional annual percentage rate for liability accounts.
        due_day: Optional payment due day for liability accounts.
    """

    id: str
    name: str
    kind: AccountKind
    balance: Decimal
    account_type: str | None = None
    credit_limit: Decimal | None = None
    apr: Decimal | None = None
    due_day: int | None = None

    @property
    def is_asset(self) -> bool:
        return self.kind is AccountKind.ASSET

    @property
    def is_liability(self) -> bool:
        return self.kind is AccountKind.LIABILITY


__all__ = ["Account"]
