"""HOA research provider interface."""

from abc import ABC, abstractmethod

from hoa_scout.domain.hoa.value_objects import (
    HOASearchQuery,
    ResearchFinding,
    ResearchTopic,
)


class HOAResearchProvider(ABC):
    """Abstract interface for topic research (financials, rules, reviews)."""

    @abstractmethod
    async def research(
        self,
        topic: ResearchTopic,
        query: HOASearchQuery,
    ) -> ResearchFinding:
        """
        Look up one research topic for an HOA.

        Like ``HOASearchProvider.search``, implementations report failures
        through ``ResearchFinding(success=False, error=...)`` and never raise
        for them.

        Parameters
        ----------
        topic
            What to research
        query
            Name and location of the association, plus the management company
            and subdivision when known

        Returns
        -------
        ResearchFinding with ``found_info`` telling whether anything
        verifiable was found.
        """
