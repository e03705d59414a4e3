"""Error types and clock helpers shared by every domain package."""

from hoa_scout.domain.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ExternalServiceError,
    PersistenceError,
    ValidationError,
)
from hoa_scout.domain.shared.text import is_blank
from hoa_scout.domain.shared.time import (
    Clock,
    ensure_tz_aware,
    parse_iso_datetime,
    utc_now,
)

__all__ = [
    "Clock",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ExternalServiceError",
    "PersistenceError",
    "ValidationError",
    "ensure_tz_aware",
    "is_blank",
    "parse_iso_datetime",
    "utc_now",
]
