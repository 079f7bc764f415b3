"""Shared fixtures: an in-memory ledger database with seeded accounts."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, insert, select
from sqlalchemy.pool import StaticPool

from payledger.infrastructure import schema
from payledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from payledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)

USER_ID = "user-1"
# Biweekly schedule anchored on 2025-01-03: 2025-01-20 sits in the period
# 2025-01-17..2025-01-30 and the next pay date is 2025-01-31.
PAY_ANCHOR = date(2025, 1, 3)


def _account(account_id, name, kind, balance, account_type, limit=None):
    return {
        "id": account_id,
        "user_id": USER_ID,
        "name": name,
        "kind": kind,
        "account_type": account_type,
        "balance": Decimal(balance),
        "credit_limit": Decimal(limit) if limit is not None else None,
    }


def _bill(bill_id, name, amount, due_day, auto_mark_paid=False):
    return {
        "id": bill_id,
        "user_id": USER_ID,
        "name": name,
        "amount": Decimal(amount),
        "due_day": due_day,
        "is_active": True,
        "is_auto_pay": False,
        "auto_mark_paid": auto_mark_paid,
        "last_paid_date": None,
    }


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections."""
    ledger_engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        future=True,
    )
    schema.create_schema(ledger_engine)
    yield ledger_engine
    ledger_engine.dispose()


@pytest.fixture
def seeded_engine(engine):
    """Engine with settings, accounts, bills, goals and a food budget."""
    with engine.begin() as conn:
        conn.execute(
            insert(schema.pay_settings).values(
                user_id=USER_ID,
                pay_frequency="biweekly",
                pay_anchor_date=PAY_ANCHOR,
                primary_account_id="checking",
                net_pay_amount=Decimal("1500.00"),
            )
        )
        conn.execute(
            insert(schema.accounts),
            [
                _account("checking", "Checking", "asset", "1000.00", "checking"),
                _account("savings", "Savings", "asset", "200.00", "savings"),
                _account(
                    "card",
                    "Visa",
                    "liability",
                    "300.00",
                    "credit_card",
                    limit="1000.00",
                ),
            ],
        )
        conn.execute(
            insert(schema.bills),
            [
                _bill("rent", "Rent", "420.00", 25),
                _bill("stream", "Streaming", "15.00", 18, auto_mark_paid=True),
            ],
        )
        conn.execute(
            insert(schema.savings_goals),
            [
                {
                    "id": "emergency",
                    "user_id": USER_ID,
                    "name": "Emergency fund",
                    "target_amount": Decimal("1000.00"),
                    "current_amount": Decimal("200.00"),
                    "linked_account_id": "savings",
                    "is_completed": False,
                },
                {
                    "id": "vacation",
                    "user_id": USER_ID,
                    "name": "Vacation",
                    "target_amount": Decimal("500.00"),
                    "current_amount": Decimal("100.00"),
                    "linked_account_id": None,
                    "is_completed": False,
                },
            ],
        )
        conn.execute(
            insert(schema.category_budgets).values(
                user_id=USER_ID,
                category="food",
                amount=Decimal("300.00"),
            )
        )
    return engine


@pytest.fixture
def repository(seeded_engine):
    """Ledger repository over the seeded database."""
    return SqlAlchemyLedgerRepository(
        SqlAlchemyDatabaseEngineAdapter(seeded_engine),
        logger=MagicMock(),
    )


@pytest.fixture
def balance_of(seeded_engine):
    """Return a reader of account balances."""

    def _read(account_id):
        table = schema.accounts
        with seeded_engine.connect() as conn:
            value = conn.execute(
                select(table.c.balance).where(table.c.id == account_id)
            ).scalar_one()
        return Decimal(str(value))

    return _read


@pytest.fixture
def summary_of(repository):
    """Return a reader of period summaries."""

    def _read(period_id):
        with repository.unit_of_work(USER_ID) as uow:
            return uow.get_period_summary(period_id)

    return _read
