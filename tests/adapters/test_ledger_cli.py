"""Tests for the command-line adapters."""

from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from payledger.adapters import init_db_cli, overview_cli, process_due_cli
from payledger.infrastructure.settings import LedgerSettings

USER_ID = "user-1"


def test_init_db_creates_schema_and_prints(monkeypatch, capsys):
    """init_db should create the schema through the repository."""
    fake_logger = MagicMock()
    dummy_adapter = object()
    fake_repository = MagicMock()

    monkeypatch.setattr(init_db_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        init_db_cli,
        "SqlAlchemyDatabaseEngineAdapter",
        lambda: dummy_adapter,
    )

    def _fake_repository(db_port, logger):
        assert db_port is dummy_adapter
        assert logger is fake_logger
        return fake_repository

    monkeypatch.setattr(
        init_db_cli,
        "SqlAlchemyLedgerRepository",
        _fake_repository,
    )

    init_db_cli.main()

    fake_repository.create_schema.assert_called_once()
    assert "schema created" in capsys.readouterr().out


@pytest.mark.parametrize("module", [process_due_cli, overview_cli])
def test_user_id_is_required(monkeypatch, module):
    """Commands scoped to a user fail without LEDGER_USER_ID."""
    monkeypatch.setattr(module, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(
        module.LedgerSettings,
        "from_env",
        classmethod(lambda cls: LedgerSettings()),
    )

    with pytest.raises(RuntimeError, match="LEDGER_USER_ID"):
        module.main()


def test_process_due_runs_both_catch_ups(monkeypatch, capsys):
    """process_due should run recurring then income catch-up."""
    settings = LedgerSettings(
        default_user_id=USER_ID,
        today_override=date(2025, 3, 31),
    )
    calls = []

    class _FakeUseCase:
        def __init__(self, label, posted):
            self._label = label
            self._posted = posted

        def execute(self, user_id, today):
            calls.append((self._label, user_id, today))
            return SimpleNamespace(posted_count=self._posted, skipped_count=1)

    monkeypatch.setattr(process_due_cli, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(
        process_due_cli.LedgerSettings,
        "from_env",
        classmethod(lambda cls: settings),
    )
    monkeypatch.setattr(
        process_due_cli,
        "build_ledger_repository",
        lambda settings: "repository",
    )
    monkeypatch.setattr(
        process_due_cli,
        "ProcessRecurringDueUseCase",
        lambda repository, logger: _FakeUseCase("recurring", 3),
    )
    monkeypatch.setattr(
        process_due_cli,
        "ProcessIncomeDueUseCase",
        lambda repository, logger: _FakeUseCase("income", 2),
    )

    process_due_cli.main()

    assert calls == [
        ("recurring", USER_ID, date(2025, 3, 31)),
        ("income", USER_ID, date(2025, 3, 31)),
    ]
    out = capsys.readouterr().out
    assert "Recurring: 3 posted, 1 skipped." in out
    assert "Income: 2 posted, 1 skipped." in out


def test_overview_prints_safe_to_spend(monkeypatch, capsys, repository):
    """overview should print the reserve and each upcoming bill."""
    settings = LedgerSettings(
        default_user_id=USER_ID,
        today_override=date(2025, 1, 20),
    )
    monkeypatch.setattr(overview_cli, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(
        overview_cli.LedgerSettings,
        "from_env",
        classmethod(lambda cls: settings),
    )
    monkeypatch.setattr(
        overview_cli,
        "build_ledger_repository",
        lambda settings: repository,
    )

    overview_cli.main()

    out = capsys.readouterr().out
    assert "Primary account: Checking (1000.00)" in out
    assert "next pay date 2025-01-31" in out
    assert "Reserved for bills: 420.00" in out
    assert "Safe to spend: 580.00" in out
    assert "2025-01-25 Rent: 420.00 (due)" in out
