"""Clock helpers. All datetimes in the domain are timezone-aware UTC."""

from datetime import datetime, timezone
from typing import Any, Callable

# Injected wherever code compares against "now" so tests can pin time.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Treat naive datetimes (as SQLite returns them) as UTC."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def parse_iso_datetime(value: Any) -> datetime | None:
    """Read an ISO-8601 value such as ``2024-03-01T12:00:00Z``.

    Returns None for empty, unparseable or non-string input (stored JSON may
    hold numbers) instead of raising.
    """
    if isinstance(value, datetime):
        return ensure_tz_aware(value)
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return ensure_tz_aware(datetime.fromisoformat(text))
    except ValueError:
        return None
