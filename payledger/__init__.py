"""Pay-period ledger engine for personal budgeting."""

__version__ = "0.1.0"
