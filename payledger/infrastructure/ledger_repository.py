"""SQLAlchemy-backed ledger repository.

Each unit of work wraps one ``engine.begin()`` block, so every statement
issued through it commits together or rolls back together. Balances and
period totals are changed only with ``col = col + :delta`` updates, and
summaries and catch-up occurrences are created with insert-if-absent
statements so concurrent writers never double count.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    and_,
    case,
    func,
    insert,
    literal,
    or_,
    select,
    update,
)
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Connection, Row

from payledger.application.ports.database import DatabaseEnginePort
from payledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerUnitOfWorkPort,
)
from payledger.domain.constants import (
    AccountKind,
    OriginKind,
    PayFrequency,
    RecurrenceFrequency,
    TransactionKind,
)
from payledger.domain.errors import NotFoundError
from payledger.domain.models import (
    Account,
    Bill,
    IncomeDeposit,
    IncomeSource,
    PayPeriod,
    PayPeriodSummary,
    PaySettings,
    RecurringDefinition,
    SavingsGoal,
    SummaryDelta,
    Transaction,
    TransactionQuery,
)
from payledger.infrastructure import schema
from payledger.infrastructure.logging.logger import get_app_logger
from payledger.utils.decimal_utils import coerce_decimal

UNCATEGORIZED = "Uncategorized"

_INSERT_IGNORE_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_OCCURRENCE_KEY = (
    "user_id",
    "origin_kind",
    "origin_id",
    "date",
    "source_account_id",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _optional_decimal(value) -> Decimal | None:
    if value is None:
        return None
    return coerce_decimal(value)


def _semimonthly_days(row: Row) -> tuple[int, int] | None:
    if row.semimonthly_day1 is None or row.semimonthly_day2 is None:
        return None
    return (row.semimonthly_day1, row.semimonthly_day2)


def _account_from_row(row: Row) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        kind=AccountKind(row.kind),
        balance=coerce_decimal(row.balance),
        account_type=row.account_type,
        credit_limit=_optional_decimal(row.credit_limit),
        apr=_optional_decimal(row.apr),
        due_day=row.due_day,
    )


def _transaction_from_row(row: Row) -> Transaction:
    return Transaction(
        id=row.id,
        date=row.date,
        amount=coerce_decimal(row.amount),
        description=row.description,
        kind=TransactionKind(row.kind),
        source_account_id=row.source_account_id,
        pay_period_id=row.pay_period_id,
        destination_account_id=row.destination_account_id,
        bill_id=row.bill_id,
        category=row.category,
        origin_kind=OriginKind(row.origin_kind),
        origin_id=row.origin_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _summary_from_row(row: Row) -> PayPeriodSummary:
    return PayPeriodSummary(
        id=row.period_id,
        period_start=row.period_start,
        period_end=row.period_end,
        income_total=coerce_decimal(row.income_total),
        bills_total=coerce_decimal(row.bills_total),
        discretionary_total=coerce_decimal(row.discretionary_total),
        net_change=coerce_decimal(row.net_change),
        transaction_count=int(row.transaction_count),
    )


def _bill_from_row(row: Row) -> Bill:
    return Bill(
        id=row.id,
        name=row.name,
        amount=coerce_decimal(row.amount),
        due_day=row.due_day,
        is_active=bool(row.is_active),
        is_auto_pay=bool(row.is_auto_pay),
        auto_mark_paid=bool(row.auto_mark_paid),
        last_paid_date=row.last_paid_date,
    )


def _recurring_from_row(row: Row) -> RecurringDefinition:
    return RecurringDefinition(
        id=row.id,
        description=row.description,
        amount=coerce_decimal(row.amount),
        kind=TransactionKind(row.kind),
        frequency=RecurrenceFrequency(row.frequency),
        account_id=row.account_id,
        start_date=row.start_date,
        next_due_date=row.next_due_date,
        last_processed_date=row.last_processed_date,
        is_active=bool(row.is_active),
        category=row.category,
    )


def _goal_from_row(row: Row) -> SavingsGoal:
    return SavingsGoal(
        id=row.id,
        name=row.name,
        target_amount=coerce_decimal(row.target_amount),
        current_amount=coerce_decimal(row.current_amount),
        linked_account_id=row.linked_account_id,
        is_completed=bool(row.is_completed),
    )


def _transaction_values(transaction: Transaction) -> dict:
    return {
        "id": transaction.id,
        "date": transaction.date,
        "amount": transaction.amount,
        "description": transaction.description,
        "kind": transaction.kind.value,
        "source_account_id": transaction.source_account_id,
        "destination_account_id": transaction.destination_account_id,
        "bill_id": transaction.bill_id,
        "category": transaction.category,
        "pay_period_id": transaction.pay_period_id,
        "origin_kind": transaction.origin_kind.value,
        "origin_id": transaction.origin_id,
        "created_at": transaction.created_at,
        "updated_at": transaction.updated_at,
    }


class SqlAlchemyLedgerUnitOfWork(LedgerUnitOfWorkPort):
    """Ledger reads and writes bound to one open connection and user."""

    def __init__(self, conn: Connection, user_id: str) -> None:
        """Initialize the unit of work.

        Args:
            conn: Connection inside an open transaction.
            user_id: Owner every statement is scoped to.
        """
        self._conn = conn
        self._user_id = user_id

    # Reads

    def get_settings(self) -> PaySettings | None:
        table = schema.pay_settings
        row = self._conn.execute(
            select(table).where(table.c.user_id == self._user_id)
        ).first()
        if row is None:
            return None
        return PaySettings(
            pay_frequency=PayFrequency(row.pay_frequency),
            pay_anchor_date=row.pay_anchor_date,
            semimonthly_days=_semimonthly_days(row),
            primary_account_id=row.primary_account_id,
            net_pay_amount=_optional_decimal(row.net_pay_amount),
        )

    def get_account(self, account_id: str) -> Account | None:
        table = schema.accounts
        row = self._conn.execute(
            select(table).where(
                table.c.user_id == self._user_id,
                table.c.id == account_id,
            )
        ).first()
        return _account_from_row(row) if row is not None else None

    def list_accounts(self) -> list[Account]:
        table = schema.accounts
        rows = self._conn.execute(
            select(table)
            .where(table.c.user_id == self._user_id)
            .order_by(table.c.kind, table.c.name)
        ).all()
        return [_account_from_row(row) for row in rows]

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        table = schema.transactions
        row = self._conn.execute(
            select(table).where(
                table.c.user_id == self._user_id,
                table.c.id == transaction_id,
            )
        ).first()
        return _transaction_from_row(row) if row is not None else None

    def list_transactions(self, query: TransactionQuery) -> list[Transaction]:
        """Return one page of transactions plus one look-ahead row."""
        table = schema.transactions
        conditions = [table.c.user_id == self._user_id]
        if query.pay_period_id:
            conditions.append(table.c.pay_period_id == query.pay_period_id)
        if query.account_id:
            conditions.append(
                or_(
                    table.c.source_account_id == query.account_id,
                    table.c.destination_account_id == query.account_id,
                )
            )
        if query.start_date is not None:
            conditions.append(table.c.date >= query.start_date)
        if query.end_date is not None:
            conditions.append(table.c.date <= query.end_date)

        rows = self._conn.execute(
            select(table)
            .where(*conditions)
            .order_by(*self._newest_first())
            .limit(query.limit + 1)
            .offset(query.offset)
        ).all()
        return [_transaction_from_row(row) for row in rows]

    def list_period_transactions(self, period_id: str) -> list[Transaction]:
        table = schema.transactions
        rows = self._conn.execute(
            select(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.pay_period_id == period_id,
            )
            .order_by(*self._newest_first())
        ).all()
        return [_transaction_from_row(row) for row in rows]

    def category_spending(self, period_id: str) -> dict[str, Decimal]:
        table = schema.transactions
        rows = self._conn.execute(
            select(table.c.category, func.sum(table.c.amount).label("total"))
            .where(
                table.c.user_id == self._user_id,
                table.c.pay_period_id == period_id,
                table.c.kind == TransactionKind.PURCHASE.value,
            )
            .group_by(table.c.category)
        ).all()
        spending: dict[str, Decimal] = {}
        for row in rows:
            category = row.category or UNCATEGORIZED
            spending[category] = spending.get(
                category, Decimal("0")
            ) + coerce_decimal(row.total)
        return dict(
            sorted(spending.items(), key=lambda item: item[1], reverse=True)
        )

    def category_budgets(self) -> dict[str, Decimal]:
        table = schema.category_budgets
        rows = self._conn.execute(
            select(table.c.category, table.c.amount)
            .where(table.c.user_id == self._user_id)
            .order_by(table.c.category)
        ).all()
        return {row.category: coerce_decimal(row.amount) for row in rows}

    def occurrence_exists(
        self,
        origin_kind: OriginKind,
        origin_id: str,
        occurrence_date: date,
        account_id: str,
    ) -> bool:
        table = schema.transactions
        row = self._conn.execute(
            select(literal(1))
            .select_from(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.origin_kind == origin_kind.value,
                table.c.origin_id == origin_id,
                table.c.date == occurrence_date,
                table.c.source_account_id == account_id,
            )
            .limit(1)
        ).first()
        return row is not None

    def get_period_summary(self, period_id: str) -> PayPeriodSummary | None:
        table = schema.pay_period_summaries
        row = self._conn.execute(
            select(table).where(
                table.c.user_id == self._user_id,
                table.c.period_id == period_id,
            )
        ).first()
        return _summary_from_row(row) if row is not None else None

    def list_period_summaries(
        self,
        limit: int,
        before: date | None = None,
    ) -> list[PayPeriodSummary]:
        table = schema.pay_period_summaries
        conditions = [table.c.user_id == self._user_id]
        if before is not None:
            conditions.append(table.c.period_start < before)
        rows = self._conn.execute(
            select(table)
            .where(*conditions)
            .order_by(table.c.period_start.desc())
            .limit(limit)
        ).all()
        return [_summary_from_row(row) for row in rows]

    def get_bill(self, bill_id: str) -> Bill | None:
        table = schema.bills
        row = self._conn.execute(
            select(table).where(
                table.c.user_id == self._user_id,
                table.c.id == bill_id,
            )
        ).first()
        return _bill_from_row(row) if row is not None else None

    def list_bills(self, active_only: bool = True) -> list[Bill]:
        table = schema.bills
        conditions = [table.c.user_id == self._user_id]
        if active_only:
            conditions.append(table.c.is_active.is_(True))
        rows = self._conn.execute(
            select(table)
            .where(*conditions)
            .order_by(table.c.due_day, table.c.name)
        ).all()
        return [_bill_from_row(row) for row in rows]

    def latest_bill_payment_date(self, bill_id: str) -> date | None:
        table = schema.transactions
        return self._conn.execute(
            select(func.max(table.c.date)).where(
                table.c.user_id == self._user_id,
                table.c.bill_id == bill_id,
                table.c.kind == TransactionKind.BILL_PAYMENT.value,
            )
        ).scalar()

    def list_due_recurring(self, today: date) -> list[RecurringDefinition]:
        table = schema.recurring_definitions
        rows = self._conn.execute(
            select(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.is_active.is_(True),
                table.c.next_due_date <= today,
            )
            .order_by(table.c.next_due_date, table.c.id)
        ).all()
        return [_recurring_from_row(row) for row in rows]

    def get_recurring(self, definition_id: str) -> RecurringDefinition | None:
        table = schema.recurring_definitions
        row = self._conn.execute(
            select(table).where(
                table.c.user_id == self._user_id,
                table.c.id == definition_id,
            )
        ).first()
        return _recurring_from_row(row) if row is not None else None

    def list_auto_income_sources(self) -> list[IncomeSource]:
        table = schema.income_sources
        rows = self._conn.execute(
            select(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.is_active.is_(True),
                table.c.auto_add.is_(True),
            )
            .order_by(table.c.id)
        ).all()
        return [self._income_source_from_row(row) for row in rows]

    def get_income_source(self, source_id: str) -> IncomeSource | None:
        table = schema.income_sources
        row = self._conn.execute(
            select(table).where(
                table.c.user_id == self._user_id,
                table.c.id == source_id,
            )
        ).first()
        if row is None:
            return None
        return self._income_source_from_row(row)

    def list_goals(self) -> list[SavingsGoal]:
        table = schema.savings_goals
        rows = self._conn.execute(
            select(table)
            .where(table.c.user_id == self._user_id)
            .order_by(table.c.name)
        ).all()
        return [_goal_from_row(row) for row in rows]

    def get_goal(self, goal_id: str) -> SavingsGoal | None:
        table = schema.savings_goals
        row = self._conn.execute(
            select(table).where(
                table.c.user_id == self._user_id,
                table.c.id == goal_id,
            )
        ).first()
        return _goal_from_row(row) if row is not None else None

    # Writes

    def insert_transaction(self, transaction: Transaction) -> None:
        values = _transaction_values(transaction)
        values["user_id"] = self._user_id
        self._conn.execute(insert(schema.transactions).values(**values))

    def insert_occurrence(self, transaction: Transaction) -> bool:
        """Insert a catch-up transaction unless its occurrence exists.

        The explicit existence check covers dialects without
        ``ON CONFLICT``; the unique constraint settles concurrent inserts.
        """
        if self.occurrence_exists(
            transaction.origin_kind,
            transaction.origin_id,
            transaction.date,
            transaction.source_account_id,
        ):
            return False
        values = _transaction_values(transaction)
        values["user_id"] = self._user_id
        return self._insert_if_absent(
            schema.transactions,
            values,
            _OCCURRENCE_KEY,
        )

    def update_transaction(self, transaction: Transaction) -> None:
        table = schema.transactions
        values = _transaction_values(transaction)
        values.pop("id")
        values.pop("created_at")
        self._conn.execute(
            update(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.id == transaction.id,
            )
            .values(**values)
        )

    def delete_transaction(self, transaction_id: str) -> None:
        table = schema.transactions
        self._conn.execute(
            table.delete().where(
                table.c.user_id == self._user_id,
                table.c.id == transaction_id,
            )
        )

    def increment_balance(self, account_id: str, delta: Decimal) -> Decimal:
        table = schema.accounts
        where = and_(
            table.c.user_id == self._user_id,
            table.c.id == account_id,
        )
        result = self._conn.execute(
            update(table)
            .where(where)
            .values(balance=table.c.balance + delta, updated_at=_utc_now())
        )
        if result.rowcount == 0:
            raise NotFoundError(f"Account not found: {account_id}")
        balance = self._conn.execute(
            select(table.c.balance).where(where)
        ).scalar_one()
        return coerce_decimal(balance)

    def ensure_period_summary(self, period: PayPeriod) -> None:
        now = _utc_now()
        self._insert_if_absent(
            schema.pay_period_summaries,
            {
                "user_id": self._user_id,
                "period_id": period.id,
                "period_start": period.period_start,
                "period_end": period.period_end,
                "income_total": Decimal("0"),
                "bills_total": Decimal("0"),
                "discretionary_total": Decimal("0"),
                "net_change": Decimal("0"),
                "transaction_count": 0,
                "created_at": now,
                "updated_at": now,
            },
            ("user_id", "period_id"),
        )

    def increment_summary(self, period_id: str, delta: SummaryDelta) -> None:
        """Add ``delta`` to a summary and re-derive its net change.

        The SET clause sees pre-update values, so the net change is derived
        from the incremented totals in the same statement.
        """
        table = schema.pay_period_summaries
        income = table.c.income_total + delta.income_total
        bills = table.c.bills_total + delta.bills_total
        discretionary = table.c.discretionary_total + delta.discretionary_total
        self._conn.execute(
            update(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.period_id == period_id,
            )
            .values(
                income_total=income,
                bills_total=bills,
                discretionary_total=discretionary,
                net_change=income - bills - discretionary,
                transaction_count=(
                    table.c.transaction_count + delta.transaction_count
                ),
                updated_at=_utc_now(),
            )
        )

    def set_bill_last_paid(self, bill_id: str, paid_on: date | None) -> None:
        table = schema.bills
        self._conn.execute(
            update(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.id == bill_id,
            )
            .values(last_paid_date=paid_on, updated_at=_utc_now())
        )

    def sync_linked_goals(self, account_id: str) -> None:
        account = self.get_account(account_id)
        if account is None:
            return
        table = schema.savings_goals
        self._conn.execute(
            update(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.linked_account_id == account_id,
            )
            .values(
                current_amount=account.balance,
                is_completed=table.c.target_amount <= account.balance,
                updated_at=_utc_now(),
            )
        )

    def add_to_goal(self, goal_id: str, delta: Decimal) -> bool:
        """Add ``delta`` to an unlinked goal in a single UPDATE.

        The clamped amount and the completion flag are derived from the
        stored value inside the statement, so concurrent contributions
        are never lost.
        """
        table = schema.savings_goals
        raised = table.c.current_amount + delta
        zero = literal(Decimal("0"), schema.MONEY)
        clamped = case((raised < zero, zero), else_=raised)
        result = self._conn.execute(
            update(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.id == goal_id,
                table.c.linked_account_id.is_(None),
            )
            .values(
                current_amount=clamped,
                is_completed=table.c.target_amount <= clamped,
                updated_at=_utc_now(),
            )
        )
        return result.rowcount == 1

    def advance_recurring(
        self,
        definition_id: str,
        next_due_date: date,
        processed_on: date,
    ) -> None:
        table = schema.recurring_definitions
        owned = and_(
            table.c.user_id == self._user_id,
            table.c.id == definition_id,
        )
        self._conn.execute(
            update(table)
            .where(owned, table.c.next_due_date < next_due_date)
            .values(next_due_date=next_due_date, updated_at=_utc_now())
        )
        self._conn.execute(
            update(table)
            .where(
                owned,
                or_(
                    table.c.last_processed_date.is_(None),
                    table.c.last_processed_date < processed_on,
                ),
            )
            .values(last_processed_date=processed_on, updated_at=_utc_now())
        )

    def mark_income_processed(self, source_id: str, processed_on: date) -> None:
        table = schema.income_sources
        self._conn.execute(
            update(table)
            .where(
                table.c.user_id == self._user_id,
                table.c.id == source_id,
                or_(
                    table.c.last_processed_date.is_(None),
                    table.c.last_processed_date < processed_on,
                ),
            )
            .values(last_processed_date=processed_on, updated_at=_utc_now())
        )

    # Helpers

    @staticmethod
    def _newest_first():
        table = schema.transactions
        return (
            table.c.date.desc(),
            table.c.created_at.desc(),
            table.c.id.desc(),
        )

    def _income_source_from_row(self, row: Row) -> IncomeSource:
        deposits_table = schema.income_deposits
        deposit_rows = self._conn.execute(
            select(deposits_table)
            .where(deposits_table.c.income_source_id == row.id)
            .order_by(deposits_table.c.position)
        ).all()
        return IncomeSource(
            id=row.id,
            name=row.name,
            frequency=PayFrequency(row.frequency),
            anchor_date=row.anchor_date,
            deposits=tuple(
                IncomeDeposit(
                    account_id=deposit.account_id,
                    amount=coerce_decimal(deposit.amount),
                )
                for deposit in deposit_rows
            ),
            semimonthly_days=_semimonthly_days(row),
            auto_add=bool(row.auto_add),
            last_processed_date=row.last_processed_date,
            is_active=bool(row.is_active),
        )

    def _insert_if_absent(self, table, values: dict, key_columns) -> bool:
        """Insert a row unless a row with the same key exists.

        Returns:
            bool: True if the row was inserted.
        """
        dialect_insert = _INSERT_IGNORE_DIALECTS.get(self._conn.dialect.name)
        if dialect_insert is not None:
            statement = dialect_insert(table).values(**values)
            result = self._conn.execute(statement.on_conflict_do_nothing())
            return result.rowcount == 1

        conditions = [table.c[name] == values[name] for name in key_columns]
        existing = self._conn.execute(
            select(literal(1)).select_from(table).where(*conditions).limit(1)
        ).first()
        if existing is not None:
            return False
        self._conn.execute(insert(table).values(**values))
        return True


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository opening SQLAlchemy units of work on the ledger engine."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    @contextmanager
    def unit_of_work(self, user_id: str) -> Iterator[SqlAlchemyLedgerUnitOfWork]:
        """Open a transaction scoped to one user.

        Args:
            user_id: Owner every statement is scoped to.

        Yields:
            SqlAlchemyLedgerUnitOfWork: Unit of work committed on exit.
        """
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            yield SqlAlchemyLedgerUnitOfWork(conn, user_id)

    def create_schema(self) -> None:
        """Create the ledger tables that do not exist yet."""
        engine = self._db_port.get_ledger_engine()
        schema.create_schema(engine)
        self._logger.info("Ledger schema is up to date")


__all__ = [
    "UNCATEGORIZED",
    "SqlAlchemyLedgerUnitOfWork",
    "SqlAlchemyLedgerRepository",
]
