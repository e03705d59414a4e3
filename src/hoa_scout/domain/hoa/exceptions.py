"""Errors raised around HOA profiles, analysis and city lookups."""

from hoa_scout.domain.shared.exceptions import (
    EntityNotFoundError,
    ErrorCode,
    ExternalServiceError,
    PersistenceError,
)


class HOANotFoundError(EntityNotFoundError):
    default_code = ErrorCode.HOA_NOT_FOUND

    def __init__(self, hoa_id: str) -> None:
        super().__init__("HOA not found", details={"hoa_id": hoa_id})


class AnalysisQueueFullError(ExternalServiceError):
    """Every slot of the background analysis queue is taken."""

    default_code = ErrorCode.ANALYSIS_QUEUE_FULL

    def __init__(self, capacity: int) -> None:
        super().__init__(
            "Analysis queue is full, please retry later",
            details={"capacity": capacity},
        )


class DistinctCitiesUnavailableError(PersistenceError):
    """The database could not run ``SELECT DISTINCT`` on the city column."""

    default_code = ErrorCode.DISTINCT_UNAVAILABLE

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Distinct city lookup is not available",
            details={"reason": reason},
        )
