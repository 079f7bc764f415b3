"""Domain models for savings goals."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SavingsGoal:
    """Savings goal, optionally mirrored on an account balance."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    linked_account_id: str | None = None
    is_completed: bool = False

    @property
    def is_linked(self) -> bool:
        return self.linked_account_id is not None


__all__ = ["SavingsGoal"]
