"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import date
import os
from typing import Optional

import dotenv

from payledger.infrastructure.logging.logger import get_app_logger

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings for the ledger adapters.

    Attributes:
        database_url: SQLAlchemy URL of the ledger database.
        create_schema: Create missing tables when the repository is built.
        default_user_id: User processed by the command-line tools.
        today_override: Fixed reference date for catch-up and overview.
    """

    database_url: Optional[str] = None
    create_schema: bool = False
    default_user_id: Optional[str] = None
    today_override: Optional[date] = None

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from the environment and an
            optional ``.env`` file.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        raw_today = os.getenv("LEDGER_TODAY")
        return cls(
            database_url=os.getenv("LEDGER_DB_URL") or None,
            create_schema=cls._parse_flag(os.getenv("LEDGER_CREATE_SCHEMA")),
            default_user_id=os.getenv("LEDGER_USER_ID") or None,
            today_override=cls._parse_date(raw_today, logger=logger),
        )

    @staticmethod
    def _parse_flag(raw_value: Optional[str]) -> bool:
        if raw_value is None:
            return False
        return raw_value.strip().lower() in _TRUE_VALUES

    @staticmethod
    def _parse_date(raw_value: Optional[str], logger) -> Optional[date]:
        """Parse an ISO date, ignoring invalid values.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            Optional[date]: Parsed date or None.
        """
        if not raw_value:
            return None
        try:
            return date.fromisoformat(raw_value.strip())
        except ValueError:
            logger.warning(f"Ignoring invalid LEDGER_TODAY value: {raw_value}")
            return None


__all__ = ["LedgerSettings"]
