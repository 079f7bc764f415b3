"""SQLAlchemy Core schema for the ledger store.

Money columns use ``Numeric(14, 2)`` so balances and totals can be updated
in place with ``col = col + :delta`` statements.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    MetaData,
    Numeric,
    PrimaryKeyConstraint,
    String,
    Table,
    UniqueConstraint,
)

MONEY = Numeric(14, 2)

metadata = MetaData()

pay_settings = Table(
    "pay_settings",
    metadata,
    Column("user_id", String(64), primary_key=True),
    Column("pay_frequency", String(16), nullable=False),
    Column("pay_anchor_date", Date, nullable=False),
    Column("semimonthly_day1", Integer),
    Column("semimonthly_day2", Integer),
    Column("primary_account_id", String(64)),
    Column("net_pay_amount", MONEY),
    Column("updated_at", DateTime),
)

accounts = Table(
    "accounts",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("kind", String(16), nullable=False),
    Column("account_type", String(32)),
    Column("balance", MONEY, nullable=False, default=0),
    Column("credit_limit", MONEY),
    Column("apr", Numeric(6, 3)),
    Column("due_day", Integer),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False),
    Column("date", Date, nullable=False),
    Column("amount", MONEY, nullable=False),
    Column("description", String(255), nullable=False),
    Column("kind", String(16), nullable=False),
    Column("source_account_id", String(64), nullable=False),
    Column("destination_account_id", String(64)),
    Column("bill_id", String(64)),
    Column("category", String(64)),
    Column("pay_period_id", String(10), nullable=False),
    Column("origin_kind", String(16), nullable=False, default="manual"),
    Column("origin_id", String(64)),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    UniqueConstraint(
        "user_id",
        "origin_kind",
        "origin_id",
        "date",
        "source_account_id",
        name="uq_transactions_occurrence",
    ),
    Index("ix_transactions_user_date", "user_id", "date"),
    Index("ix_transactions_user_period", "user_id", "pay_period_id"),
)

pay_period_summaries = Table(
    "pay_period_summaries",
    metadata,
    Column("user_id", String(64), nullable=False),
    Column("period_id", String(10), nullable=False),
    Column("period_start", Date, nullable=False),
    Column("period_end", Date, nullable=False),
    Column("income_total", MONEY, nullable=False, default=0),
    Column("bills_total", MONEY, nullable=False, default=0),
    Column("discretionary_total", MONEY, nullable=False, default=0),
    Column("net_change", MONEY, nullable=False, default=0),
    Column("transaction_count", Integer, nullable=False, default=0),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    PrimaryKeyConstraint("user_id", "period_id"),
)

bills = Table(
    "bills",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("amount", MONEY, nullable=False),
    Column("due_day", Integer, nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("is_auto_pay", Boolean, nullable=False, default=False),
    Column("auto_mark_paid", Boolean, nullable=False, default=False),
    Column("last_paid_date", Date),
    Column("updated_at", DateTime),
)

recurring_definitions = Table(
    "recurring_definitions",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("description", String(255), nullable=False),
    Column("amount", MONEY, nullable=False),
    Column("kind", String(16), nullable=False),
    Column("frequency", String(16), nullable=False),
    Column("account_id", String(64), nullable=False),
    Column("category", String(64)),
    Column("start_date", Date, nullable=False),
    Column("next_due_date", Date, nullable=False),
    Column("last_processed_date", Date),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("updated_at", DateTime),
)

income_sources = Table(
    "income_sources",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("frequency", String(16), nullable=False),
    Column("anchor_date", Date, nullable=False),
    Column("semimonthly_day1", Integer),
    Column("semimonthly_day2", Integer),
    Column("auto_add", Boolean, nullable=False, default=False),
    Column("last_processed_date", Date),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("updated_at", DateTime),
)

income_deposits = Table(
    "income_deposits",
    metadata,
    Column("income_source_id", String(64), nullable=False),
    Column("position", Integer, nullable=False),
    Column("account_id", String(64), nullable=False),
    Column("amount", MONEY, nullable=False),
    PrimaryKeyConstraint("income_source_id", "position"),
)

savings_goals = Table(
    "savings_goals",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("target_amount", MONEY, nullable=False),
    Column("current_amount", MONEY, nullable=False, default=0),
    Column("linked_account_id", String(64)),
    Column("is_completed", Boolean, nullable=False, default=False),
    Column("updated_at", DateTime),
)

category_budgets = Table(
    "category_budgets",
    metadata,
    Column("user_id", String(64), nullable=False),
    Column("category", String(64), nullable=False),
    Column("amount", MONEY, nullable=False),
    PrimaryKeyConstraint("user_id", "category"),
)


def create_schema(engine) -> None:
    """Create every ledger table that does not exist yet."""
    metadata.create_all(engine)


__all__ = [
    "MONEY",
    "metadata",
    "pay_settings",
    "accounts",
    "transactions",
    "pay_period_summaries",
    "bills",
    "recurring_definitions",
    "income_sources",
    "income_deposits",
    "savings_goals",
    "category_budgets",
    "create_schema",
]
