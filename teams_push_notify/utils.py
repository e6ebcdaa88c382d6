"""
Shared utility functions for teams-push-notify.
"""

from __future__ import annotations

from typing import Any, List, Optional


def split_multiline(value: Optional[str]) -> List[str]:
    """
    Split a newline separated input into entries.

    Args:
        value: Raw input text, one entry per line

    Returns:
        Stripped entries. Leading and trailing blank lines are dropped;
        interior blank lines are kept as empty entries so callers can reject them.
    """
    if not value or not value.strip():
        return []
    return [line.strip() for line in value.strip().splitlines()]


def parse_bool(value: Any) -> bool:
    """
    Only "true" (any case) is true; anything else is false.
    """
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() == "true"
