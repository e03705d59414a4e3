"""Repository interface for HOA profiles."""

from abc import ABC, abstractmethod
from typing import List, Optional

from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.value_objects import HOASummary

CITY_SCAN_LIMIT = 50000


class HOAProfileRepository(ABC):
    """Repository interface for persisting and retrieving HOA profiles."""

    @abstractmethod
    async def save(self, profile: HOAProfile) -> None:
        """
        Insert or update an HOA profile.

        Parameters
        ----------
        profile
            Profile to save
        """

    @abstractmethod
    async def find_by_id(self, hoa_id: str) -> Optional[HOAProfile]:
        """
        Find an HOA profile by ID.

        Parameters
        ----------
        hoa_id
            Opaque profile identifier

        Returns
        -------
        Profile if found, None otherwise
        """

    @abstractmethod
    async def get_overall_score(self, hoa_id: str) -> tuple[bool, Optional[float]]:
        """
        Read only the overall score of a profile.

        Returns
        -------
        Tuple of (exists, overall_score)
        """

    @abstractmethod
    async def search_by_name(self, term: str, limit: int) -> List[HOASummary]:
        """
        Case-insensitive substring search on the HOA name.

        Wildcard characters in ``term`` match literally. Results are ordered
        by name ascending.

        Parameters
        ----------
        term
            Trimmed search term
        limit
            Maximum number of results
        """

    @abstractmethod
    async def browse(
        self,
        city: Optional[str],
        zip_code: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[List[HOASummary], int]:
        """
        List profiles by city (case-insensitive exact) and/or zip code.

        Returns
        -------
        Tuple of (page of summaries ordered by name, total match count)
        """

    @abstractmethod
    async def find_distinct_cities(self) -> List[str]:
        """
        Return distinct city values computed by the datastore.

        Raises
        ------
        DistinctCitiesUnavailableError
            If the datastore cannot compute distinct values
        """

    @abstractmethod
    async def list_city_values(self, limit: int = CITY_SCAN_LIMIT) -> List[str]:
        """Return raw (possibly duplicated) city values, at most ``limit``."""
