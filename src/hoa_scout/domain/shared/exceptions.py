"""Error codes and the base exception of the HOA Scout domain.

Every error the domain raises towards a caller derives from
``DomainException``. The presentation layer turns the ``code`` into an
HTTP status; the ``message`` is shown to end users as-is.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in API error bodies."""

    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_QUERY = "INVALID_QUERY"
    MISSING_LOCATION = "MISSING_LOCATION"
    MISSING_HOA_ID = "MISSING_HOA_ID"

    # 404
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    HOA_NOT_FOUND = "HOA_NOT_FOUND"

    # 503
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    ANALYSIS_QUEUE_FULL = "ANALYSIS_QUEUE_FULL"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"

    # 500
    DISTINCT_UNAVAILABLE = "DISTINCT_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base class for errors raised by domain and application code.

    Attributes
    ----------
    message
        Text safe to show to end users
    code
        Error code; subclasses set ``default_code``
    details
        Extra context for logs, never sent to clients
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.message!r}, "
            f"code={self.code.value!r}, details={self.details!r})"
        )


class ValidationError(DomainException):
    """Request input is missing or malformed."""

    default_code = ErrorCode.VALIDATION_ERROR


class EntityNotFoundError(DomainException):
    """A referenced record does not exist."""

    default_code = ErrorCode.ENTITY_NOT_FOUND


class ExternalServiceError(DomainException):
    """A third-party API failed or answered with something unusable."""

    default_code = ErrorCode.EXTERNAL_SERVICE_ERROR


class PersistenceError(DomainException):
    """The database rejected a read or write."""

    default_code = ErrorCode.PERSISTENCE_ERROR
