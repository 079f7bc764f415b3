"""Use case for adding money to an unlinked savings goal."""

from decimal import Decimal

from payledger.application.ports.ledger_repository import LedgerRepositoryPort
from payledger.domain.errors import ConflictError, NotFoundError
from payledger.domain.models import SavingsGoal
from payledger.infrastructure.logging.logger import get_app_logger


class ContributeToGoalUseCase:
    """Adjust the progress of a savings goal not mirrored on an account."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        goal_id: str,
        amount: Decimal,
    ) -> SavingsGoal:
        """Add ``amount`` (negative to withdraw) to a goal.

        The increment is applied in place, so progress never drops below
        zero and the completion flag follows the target even when several
        contributions land at once.

        Raises:
            NotFoundError: If the goal does not exist.
            ConflictError: If the goal is linked to an account.
        """
        with self._repository.unit_of_work(user_id) as uow:
            if not uow.add_to_goal(goal_id, amount):
                if uow.get_goal(goal_id) is None:
                    raise NotFoundError(f"Savings goal not found: {goal_id}")
                raise ConflictError(
                    "Linked goals track their account balance and cannot "
                    "receive contributions"
                )
            goal = uow.get_goal(goal_id)

        self._logger.info(
            f"Goal {goal_id} contribution {amount}: now {goal.current_amount}"
        )
        return goal


__all__ = ["ContributeToGoalUseCase"]
