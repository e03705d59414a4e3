"""HOA web search provider interface."""

from abc import ABC, abstractmethod

from hoa_scout.domain.hoa.value_objects import HOASearchQuery, HOASearchResult


class HOASearchProvider(ABC):
    """Abstract interface for looking up public information about an HOA."""

    @abstractmethod
    async def search(self, query: HOASearchQuery) -> HOASearchResult:
        """
        Search the web for information about an HOA.

        Implementations must not raise for lookup failures (missing
        credentials, timeouts, HTTP errors, unparseable answers); they return
        ``HOASearchResult(success=False, error=...)`` instead.

        Parameters
        ----------
        query
            Name and location of the association

        Returns
        -------
        HOASearchResult with ``found_info`` telling whether anything useful
        was found.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name used in stored records."""
