"""CLI adapter running recurring and income catch-up for one user.

The user comes from ``LEDGER_USER_ID``; ``LEDGER_TODAY`` optionally pins
the reference date. Catch-up is idempotent, so the command can be run as
often as needed.
"""

from payledger.application.use_cases.process_income_due import (
    ProcessIncomeDueUseCase,
)
from payledger.application.use_cases.process_recurring_due import (
    ProcessRecurringDueUseCase,
)
from payledger.infrastructure.container import (
    build_clock,
    build_ledger_repository,
)
from payledger.infrastructure.logging.logger import get_app_logger
from payledger.infrastructure.settings import LedgerSettings


def main() -> None:
    """Post every due recurring transaction and paycheck."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    if not settings.default_user_id:
        raise RuntimeError("Missing environment variable: LEDGER_USER_ID")

    repository = build_ledger_repository(settings=settings)
    today = build_clock(settings)()
    recurring = ProcessRecurringDueUseCase(repository, logger=logger)
    income = ProcessIncomeDueUseCase(repository, logger=logger)

    recurring_result = recurring.execute(settings.default_user_id, today)
    income_result = income.execute(settings.default_user_id, today)

    print(
        f"Recurring: {recurring_result.posted_count} posted, "
        f"{recurring_result.skipped_count} skipped."
    )
    print(
        f"Income: {income_result.posted_count} posted, "
        f"{income_result.skipped_count} skipped."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
