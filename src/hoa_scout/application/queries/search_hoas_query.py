"""Search HOAs by name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from hoa_scout.domain.hoa.repositories import HOAProfileRepository
from hoa_scout.domain.hoa.value_objects import HOASummary
from hoa_scout.domain.shared.exceptions import ErrorCode, ValidationError

if TYPE_CHECKING:
    from hoa_scout.application.factories import RepositoryFactory

MIN_QUERY_LENGTH = 2
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50


def coerce_limit(value: Any, default: int, maximum: int) -> int:
    """Parse a user-supplied limit, falling back to ``default``.

    The result is clamped to ``[1, maximum]``.
    """
    if value is None or value == "":
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, maximum))


@dataclass
class SearchHOAsResult:
    results: list[HOASummary]

    @property
    def count(self) -> int:
        return len(self.results)


class SearchHOAsQuery:
    """Case-insensitive substring search on HOA names."""

    def __init__(self, hoa_repository: HOAProfileRepository):
        self._hoa_repo = hoa_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> SearchHOAsQuery:
        return cls(hoa_repository=factory.hoa_profile_repository())

    async def execute(self, query: str | None, limit: Any = None) -> SearchHOAsResult:
        term = (query or "").strip()
        if len(term) < MIN_QUERY_LENGTH:
            msg = f"Query must be at least {MIN_QUERY_LENGTH} characters"
            raise ValidationError(msg, code=ErrorCode.INVALID_QUERY)

        capped = coerce_limit(limit, DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT)
        results = await self._hoa_repo.search_by_name(term, capped)
        return SearchHOAsResult(results=results)
