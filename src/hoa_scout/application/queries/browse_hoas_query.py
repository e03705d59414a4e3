"""Browse HOAs by city and/or zip code with pagination."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from hoa_scout.application.queries.search_hoas_query import coerce_limit
from hoa_scout.domain.hoa.repositories import HOAProfileRepository
from hoa_scout.domain.hoa.value_objects import HOASummary
from hoa_scout.domain.shared.exceptions import ErrorCode, ValidationError

if TYPE_CHECKING:
    from hoa_scout.application.factories import RepositoryFactory

DEFAULT_BROWSE_LIMIT = 20
MAX_BROWSE_LIMIT = 100


@dataclass
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages


@dataclass
class BrowseHOAsResult:
    results: list[HOASummary]
    pagination: Pagination


class BrowseHOAsQuery:
    """List HOAs in a city (case-insensitive) and/or zip code."""

    def __init__(self, hoa_repository: HOAProfileRepository):
        self._hoa_repo = hoa_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> BrowseHOAsQuery:
        return cls(hoa_repository=factory.hoa_profile_repository())

    async def execute(
        self,
        city: Optional[str] = None,
        zip_code: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
    ) -> BrowseHOAsResult:
        city = (city or "").strip() or None
        zip_code = (zip_code or "").strip() or None
        if city is None and zip_code is None:
            msg = "Please provide a city or zip code"
            raise ValidationError(msg, code=ErrorCode.MISSING_LOCATION)

        page_number = coerce_limit(page, 1, maximum=10**9)
        page_size = coerce_limit(limit, DEFAULT_BROWSE_LIMIT, MAX_BROWSE_LIMIT)

        results, total = await self._hoa_repo.browse(
            city=city,
            zip_code=zip_code,
            offset=(page_number - 1) * page_size,
            limit=page_size,
        )
        return BrowseHOAsResult(
            results=results,
            pagination=Pagination(page=page_number, limit=page_size, total=total),
        )
