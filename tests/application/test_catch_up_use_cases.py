"""Tests for recurring and income catch-up processing."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import insert, select

from payledger.application.use_cases.add_paycheck import AddPaycheckUseCase
from payledger.application.use_cases.process_income_due import (
    ProcessIncomeDueUseCase,
)
from payledger.application.use_cases.process_recurring_due import (
    ProcessRecurringDueUseCase,
)
from payledger.domain.errors import ConflictError, ValidationError
from payledger.infrastructure import schema

USER_ID = "user-1"


def _add_recurring(engine, definition_id, account_id="checking", **overrides):
    values = {
        "id": definition_id,
        "user_id": USER_ID,
        "description": "Gym",
        "amount": Decimal("30.00"),
        "kind": "purchase",
        "frequency": "monthly",
        "account_id": account_id,
        "category": "health",
        "start_date": date(2025, 1, 31),
        "next_due_date": date(2025, 1, 31),
        "last_processed_date": None,
        "is_active": True,
    }
    values.update(overrides)
    with engine.begin() as conn:
        conn.execute(insert(schema.recurring_definitions).values(**values))


def _add_income_source(engine, last_processed=None, auto_add=True):
    with engine.begin() as conn:
        conn.execute(
            insert(schema.income_sources).values(
                id="job",
                user_id=USER_ID,
                name="Employer",
                frequency="biweekly",
                anchor_date=date(2025, 1, 3),
                auto_add=auto_add,
                last_processed_date=last_processed,
                is_active=True,
            )
        )
        conn.execute(
            insert(schema.income_deposits),
            [
                {
                    "income_source_id": "job",
                    "position": 0,
                    "account_id": "checking",
                    "amount": Decimal("1000.00"),
                },
                {
                    "income_source_id": "job",
                    "position": 1,
                    "account_id": "savings",
                    "amount": Decimal("100.00"),
                },
                {
                    "income_source_id": "job",
                    "position": 2,
                    "account_id": "checking",
                    "amount": Decimal("400.00"),
                },
            ],
        )


def _transactions(engine, origin_kind):
    table = schema.transactions
    with engine.connect() as conn:
        return conn.execute(
            select(table)
            .where(table.c.origin_kind == origin_kind)
            .order_by(table.c.date, table.c.source_account_id)
        ).all()


def _recurring_use_case(repository):
    return ProcessRecurringDueUseCase(repository, logger=MagicMock())


def test_recurring_catch_up_posts_each_missed_occurrence(
    repository,
    seeded_engine,
    balance_of,
):
    """Three missed monthly occurrences are posted with their own periods."""
    _add_recurring(seeded_engine, "gym")

    result = _recurring_use_case(repository).execute(USER_ID, date(2025, 3, 31))

    assert result.posted_count == 3
    assert result.skipped_count == 0
    assert balance_of("checking") == Decimal("910.00")
    rows = _transactions(seeded_engine, "recurring")
    assert [row.date for row in rows] == [
        date(2025, 1, 31),
        date(2025, 2, 28),
        date(2025, 3, 31),
    ]
    assert [row.pay_period_id for row in rows] == [
        "2025-01-31",
        "2025-02-28",
        "2025-03-28",
    ]
    with repository.unit_of_work(USER_ID) as uow:
        definition = uow.get_recurring("gym")
    assert definition.next_due_date == date(2025, 4, 30)
    assert definition.last_processed_date == date(2025, 3, 31)


def test_recurring_catch_up_is_idempotent(repository, seeded_engine, balance_of):
    """A second run with the same today posts nothing."""
    _add_recurring(seeded_engine, "gym")
    use_case = _recurring_use_case(repository)

    first = use_case.execute(USER_ID, date(2025, 3, 31))
    second = use_case.execute(USER_ID, date(2025, 3, 31))

    assert first.posted_count == 3
    assert second.posted_count == 0
    assert balance_of("checking") == Decimal("910.00")


def test_recurring_existing_occurrence_is_not_reposted(
    repository,
    seeded_engine,
    balance_of,
):
    """A stale marker does not duplicate an occurrence already stored."""
    _add_recurring(seeded_engine, "gym")
    use_case = _recurring_use_case(repository)
    use_case.execute(USER_ID, date(2025, 1, 31))

    table = schema.recurring_definitions
    with seeded_engine.begin() as conn:
        conn.execute(
            table.update()
            .where(table.c.id == "gym")
            .values(
                next_due_date=date(2025, 1, 31),
                last_processed_date=None,
            )
        )

    result = use_case.execute(USER_ID, date(2025, 2, 28))

    assert result.posted_count == 1
    assert balance_of("checking") == Decimal("940.00")
    assert len(_transactions(seeded_engine, "recurring")) == 2


def test_recurring_with_missing_account_is_skipped(repository, seeded_engine):
    """Definitions pointing at deleted accounts are skipped and counted."""
    _add_recurring(seeded_engine, "orphan", account_id="closed")
    _add_recurring(seeded_engine, "gym")
    logger = MagicMock()

    result = ProcessRecurringDueUseCase(repository, logger=logger).execute(
        USER_ID,
        date(2025, 1, 31),
    )

    assert result.posted_count == 1
    assert result.skipped_count == 1
    logger.warning.assert_called_once()


def test_recurring_requires_settings(repository):
    """Catch-up needs the user's pay settings."""
    with pytest.raises(ValidationError):
        _recurring_use_case(repository).execute("someone-else", date(2025, 1, 1))


def test_income_first_run_posts_current_pay_date(
    repository,
    seeded_engine,
    balance_of,
    summary_of,
):
    """A new source posts the enclosing pay date, one row per account."""
    _add_income_source(seeded_engine)

    result = ProcessIncomeDueUseCase(repository, logger=MagicMock()).execute(
        USER_ID,
        date(2025, 1, 20),
    )

    assert result.posted_count == 2
    assert balance_of("checking") == Decimal("2400.00")
    assert balance_of("savings") == Decimal("300.00")
    rows = _transactions(seeded_engine, "income")
    assert [(row.date, row.source_account_id) for row in rows] == [
        (date(2025, 1, 17), "checking"),
        (date(2025, 1, 17), "savings"),
    ]
    assert rows[0].category == "Income"
    assert summary_of("2025-01-17").income_total == Decimal("1500.00")
    with repository.unit_of_work(USER_ID) as uow:
        assert uow.get_income_source("job").last_processed_date == date(
            2025, 1, 20
        )


def test_income_catch_up_walks_missed_pay_dates(repository, seeded_engine):
    """Every pay date after the marker is posted once."""
    _add_income_source(seeded_engine, last_processed=date(2025, 1, 20))
    use_case = ProcessIncomeDueUseCase(repository, logger=MagicMock())

    first = use_case.execute(USER_ID, date(2025, 2, 15))
    second = use_case.execute(USER_ID, date(2025, 2, 15))

    assert first.posted_count == 4
    assert second.posted_count == 0
    rows = _transactions(seeded_engine, "income")
    assert sorted({row.date for row in rows}) == [
        date(2025, 1, 31),
        date(2025, 2, 14),
    ]


def test_manual_income_source_is_not_auto_processed(repository, seeded_engine):
    """Only auto-add sources are processed."""
    _add_income_source(seeded_engine, auto_add=False)

    result = ProcessIncomeDueUseCase(repository, logger=MagicMock()).execute(
        USER_ID,
        date(2025, 1, 20),
    )

    assert result.posted_count == 0


def test_add_paycheck_posts_and_rejects_duplicates(
    repository,
    seeded_engine,
    balance_of,
):
    """A manual paycheck posts once; repeating it is a conflict."""
    _add_income_source(seeded_engine, auto_add=False)
    use_case = AddPaycheckUseCase(repository, logger=MagicMock())

    posted = use_case.execute(USER_ID, "job", pay_date=date(2025, 1, 17))

    assert len(posted) == 2
    assert balance_of("checking") == Decimal("2400.00")
    with pytest.raises(ConflictError):
        use_case.execute(USER_ID, "job", pay_date=date(2025, 1, 17))
    assert balance_of("checking") == Decimal("2400.00")
    with repository.unit_of_work(USER_ID) as uow:
        assert uow.get_income_source("job").last_processed_date == date(
            2025, 1, 17
        )
