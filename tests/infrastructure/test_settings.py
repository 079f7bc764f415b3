"""Tests for infrastructure settings."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from payledger.infrastructure import settings as settings_module
from payledger.infrastructure.settings import LedgerSettings

_ENV_NAMES = (
    "LEDGER_DB_URL",
    "LEDGER_CREATE_SCHEMA",
    "LEDGER_USER_ID",
    "LEDGER_TODAY",
)


@pytest.fixture
def logger(monkeypatch):
    """Isolate settings from .env files and log files."""
    fake_logger = MagicMock()
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: fake_logger)
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return fake_logger


def test_from_env_reads_values(monkeypatch, logger) -> None:
    """Environment values should populate every field."""
    monkeypatch.setenv("LEDGER_DB_URL", "sqlite:///ledger.db")
    monkeypatch.setenv("LEDGER_CREATE_SCHEMA", "Yes")
    monkeypatch.setenv("LEDGER_USER_ID", "user-1")
    monkeypatch.setenv("LEDGER_TODAY", "2025-01-20")

    settings = LedgerSettings.from_env()

    assert settings.database_url == "sqlite:///ledger.db"
    assert settings.create_schema is True
    assert settings.default_user_id == "user-1"
    assert settings.today_override == date(2025, 1, 20)


def test_from_env_defaults(logger) -> None:
    """Missing values should fall back to safe defaults."""
    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings()


@pytest.mark.parametrize("raw", ["0", "false", "", "maybe"])
def test_create_schema_flag_is_strict(monkeypatch, logger, raw) -> None:
    """Only explicit truthy values enable schema creation."""
    monkeypatch.setenv("LEDGER_CREATE_SCHEMA", raw)

    assert LedgerSettings.from_env().create_schema is False


def test_invalid_today_is_ignored_with_warning(monkeypatch, logger) -> None:
    """Invalid dates are dropped and reported."""
    monkeypatch.setenv("LEDGER_TODAY", "20-01-2025")

    settings = LedgerSettings.from_env()

    assert settings.today_override is None
    logger.warning.assert_called_once()
