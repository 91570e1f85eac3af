"""Timestamp formatting utilities."""

from datetime import datetime


def today() -> str:
    """Current local date as YYYY-MM-DD (used for application metadata)."""
    return datetime.now().strftime("%Y-%m-%d")


def session_stamp() -> str:
    """Compact local timestamp for naming log directories (e.g., 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
