"""List the distinct cities that have HOA profiles."""

from __future__ import annotations

import logging
import unicodedata
from typing import TYPE_CHECKING, Iterable, Optional

from hoa_scout.application.services.cities_cache import CachedCities, CitiesCache
from hoa_scout.domain.hoa.exceptions import DistinctCitiesUnavailableError
from hoa_scout.domain.hoa.repositories import CITY_SCAN_LIMIT, HOAProfileRepository

if TYPE_CHECKING:
    from hoa_scout.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


def _collation_key(city: str) -> tuple[str, str]:
    # Accent- and case-insensitive order, ties broken by the raw value.
    decomposed = unicodedata.normalize("NFKD", city)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c))
    return folded.casefold(), city


def normalize_cities(values: Iterable[Optional[str]]) -> list[str]:
    """Drop blanks, trim, deduplicate and sort city names."""
    unique = {value.strip() for value in values if value and value.strip()}
    return sorted(unique, key=_collation_key)


class ListCitiesQuery:
    """Distinct city list served through a process-wide TTL cache."""

    def __init__(
        self,
        hoa_repository: HOAProfileRepository,
        cache: CitiesCache,
    ):
        self._hoa_repo = hoa_repository
        self._cache = cache

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        cache: CitiesCache,
    ) -> ListCitiesQuery:
        return cls(hoa_repository=factory.hoa_profile_repository(), cache=cache)

    async def execute(self) -> CachedCities:
        return await self._cache.get(self.load)

    async def load(self) -> list[str]:
        try:
            values = await self._hoa_repo.find_distinct_cities()
        except DistinctCitiesUnavailableError as e:
            logger.info("Distinct cities unavailable (%s), scanning rows", e.details)
            values = await self._hoa_repo.list_city_values(limit=CITY_SCAN_LIMIT)
        return normalize_cities(values)
