"""Bounded retry with exponential backoff for outbound HTTP calls."""

from dataclasses import dataclass

import httpx

from hoa_scout_config.settings import Settings

RETRY_STATUS = {429, 500, 502, 503, 504}


@dataclass(frozen=True)
class RetryPolicy:
    """``max_retries`` extra attempts, waiting ``backoff * factor**n`` between."""

    max_retries: int = 2
    backoff_seconds: float = 0.5
    factor: float = 2.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            msg = f"max_retries cannot be negative, got {self.max_retries}"
            raise ValueError(msg)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_retries=settings.search_max_retries,
            backoff_seconds=settings.search_retry_backoff_seconds,
        )

    @property
    def attempts(self) -> int:
        return self.max_retries + 1

    def delays(self) -> list[float]:
        return [
            self.backoff_seconds * self.factor**attempt
            for attempt in range(self.max_retries)
        ]


def is_retryable(error: Exception) -> bool:
    # Timeouts and connection failures are TransportErrors
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRY_STATUS
    return False
