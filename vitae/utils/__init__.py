"""
Shared utilities for vitae.

Common functionality used across contexts:
- Logging setup
- Text processing
- Timestamps
"""

from vitae.utils.timestamp import now, today

__all__ = ["now", "today"]
