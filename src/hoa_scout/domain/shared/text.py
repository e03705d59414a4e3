"""Checks for optional text columns."""

from typing import Any


def is_blank(value: Any) -> bool:
    """None and whitespace-only strings both count as "nothing stored"."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()
