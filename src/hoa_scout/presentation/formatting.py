"""Display helpers shared by the report renderer and the CLI.

All functions are pure and tolerate missing values, returning a
placeholder ("N/A" or an empty string) instead of raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Union

from hoa_scout.domain.shared.time import parse_iso_datetime, utc_now

NOT_AVAILABLE = "N/A"
DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"

Number = Union[int, float, Decimal]

_STATE_ZIP_PATTERN = re.compile(r"^([A-Z]{2})\s+(\d{5})(-\d{4})?$")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# (threshold, text colour, background colour, label), highest first
_SCORE_BANDS = (
    (8.5, "text-green-600", "bg-green-100", "Excellent"),
    (7.0, "text-green-500", "bg-green-50", "Good"),
    (5.5, "text-yellow-600", "bg-yellow-50", "Fair"),
    (4.0, "text-orange-600", "bg-orange-50", "Poor"),
)
_LOWEST_BAND = ("text-red-600", "bg-red-50", "Critical")


def _to_decimal(value: Number) -> Optional[Decimal]:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def format_currency(amount: Optional[Number], show_cents: bool = False) -> str:
    """Format a US dollar amount, e.g. ``$1,250`` or ``$1,250.50``."""
    if amount is None:
        return NOT_AVAILABLE
    value = _to_decimal(amount)
    if value is None or not value.is_finite():
        return NOT_AVAILABLE

    places = Decimal("0.01") if show_cents else Decimal("1")
    rounded = value.copy_abs().quantize(places, rounding=ROUND_HALF_UP)
    digits = f"{rounded:,.2f}" if show_cents else f"{rounded:,.0f}"
    sign = "-" if value < 0 and rounded != 0 else ""
    return f"{sign}${digits}"


def format_number(value: Optional[Number]) -> str:
    """Group thousands with commas, keeping at most three decimals."""
    if value is None:
        return NOT_AVAILABLE
    number = _to_decimal(value)
    if number is None or not number.is_finite():
        return NOT_AVAILABLE

    rounded = number.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    text = f"{rounded:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _coerce_datetime(value: Union[str, date, datetime]) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return parse_iso_datetime(value)


def _relative(moment: datetime, now: datetime) -> str:
    days = int(abs((now - moment).total_seconds()) // 86400)
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 365:
        return f"{days // 30} months ago"
    return f"{days // 365} years ago"


def format_date(
    value: Union[str, date, datetime, None],
    fmt: str = "short",
    now: Optional[datetime] = None,
) -> str:
    """
    Format a date for display.

    Parameters
    ----------
    value
        A datetime, date or ISO 8601 string
    fmt
        ``short`` ("Jan 5, 2025"), ``long`` ("Sunday, January 5, 2025"),
        ``relative`` ("3 days ago"); anything else yields ISO 8601
    now
        Reference time for ``relative``; defaults to the current UTC time

    Returns
    -------
    The formatted string, or "N/A" for empty or unparseable input
    """
    if not value:
        return NOT_AVAILABLE
    moment = _coerce_datetime(value)
    if moment is None:
        return NOT_AVAILABLE

    if fmt == "short":
        return f"{moment:%b} {moment.day}, {moment.year}"
    if fmt == "long":
        return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year}"
    if fmt == "relative":
        return _relative(moment, now or utc_now())
    return moment.isoformat()


def _band(score: float) -> tuple[str, str, str]:
    for threshold, colour, background, label in _SCORE_BANDS:
        if score >= threshold:
            return colour, background, label
    return _LOWEST_BAND


def score_color(score: float) -> str:
    return _band(score)[0]


def score_bg_color(score: float) -> str:
    return _band(score)[1]


def score_label(score: float) -> str:
    return _band(score)[2]


def truncate(text: Optional[str], length: int = 100) -> str:
    if not text:
        return ""
    if len(text) <= length:
        return text
    return text[:length] + "..."


@dataclass(frozen=True)
class ParsedAddress:
    street: str
    city: str
    state: str
    zip_code: str


def parse_address(address: str) -> Optional[ParsedAddress]:
    """Split ``"street, city, ST 12345"`` into its parts.

    Returns None when there are fewer than three comma-separated parts.
    Without a trailing ``ST 12345`` the parts are taken positionally and the
    zip code is left empty.
    """
    parts = [part.strip() for part in address.split(",")]
    if len(parts) < 3:
        return None

    match = _STATE_ZIP_PATTERN.match(parts[-1])
    if match:
        return ParsedAddress(
            street=", ".join(parts[:-2]),
            city=parts[-2],
            state=match.group(1),
            zip_code=match.group(2),
        )
    return ParsedAddress(street=parts[0], city=parts[1], state=parts[2], zip_code="")


def calculate_percentage(value: Number, total: Optional[Number]) -> int:
    if not total:
        return 0
    ratio = Decimal(str(value)) / Decimal(str(total)) * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def get_initials(name: Optional[str]) -> str:
    if not name:
        return ""
    parts = name.split(" ")
    if len(parts) == 1:
        return parts[0][:1].upper()
    return (parts[0][:1] + parts[-1][:1]).upper()


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and _EMAIL_PATTERN.match(email) is not None


def get_error_message(error: Any) -> str:
    """Best-effort human readable message for strings, exceptions and dicts."""
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        return str(error.get("message") or error.get("error") or DEFAULT_ERROR_MESSAGE)
    message = getattr(error, "message", None)
    if message:
        return str(message)
    if isinstance(error, BaseException) and str(error):
        return str(error)
    return DEFAULT_ERROR_MESSAGE
