"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Compact timestamp for directory names (e.g., "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> str:
    """Current date as YYYY-MM-DD."""
    return datetime.now().strftime("%Y-%m-%d")
