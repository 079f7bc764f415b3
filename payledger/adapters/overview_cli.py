"""CLI adapter printing the safe-to-spend overview of one user."""

from payledger.application.use_cases.compute_overview import (
    ComputeOverviewUseCase,
)
from payledger.domain.models import Overview
from payledger.infrastructure.container import (
    build_clock,
    build_ledger_repository,
)
from payledger.infrastructure.logging.logger import get_app_logger
from payledger.infrastructure.settings import LedgerSettings


def _format_overview(overview: Overview) -> list[str]:
    safe = overview.safe_to_spend
    period = overview.current_period
    lines = [
        f"Primary account: {overview.primary_account.name} "
        f"({safe.current_balance:.2f})",
        f"Pay period: {period.period_start} to {period.period_end} "
        f"(next pay date {overview.next_pay_date})",
        f"Income {period.income_total:.2f} | Bills {period.bills_total:.2f} "
        f"| Discretionary {period.discretionary_total:.2f} "
        f"| Net {period.net_change:.2f}",
        f"Reserved for bills: {safe.required_reserve:.2f}",
        f"Safe to spend: {safe.safe_amount:.2f}",
    ]
    for bill in safe.upcoming_bills:
        status = "paid" if bill.is_paid_this_period else "due"
        lines.append(
            f"  {bill.due_date} {bill.name}: {bill.amount:.2f} ({status})"
        )
    return lines


def main() -> None:
    """Compute and print the overview."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    if not settings.default_user_id:
        raise RuntimeError("Missing environment variable: LEDGER_USER_ID")

    repository = build_ledger_repository(settings=settings)
    use_case = ComputeOverviewUseCase(
        repository,
        logger=logger,
        clock=build_clock(settings),
    )

    overview = use_case.execute(settings.default_user_id)

    for line in _format_overview(overview):
        print(line)


if __name__ == "__main__":  # pragma: no cover
    main()
