"""HOA analyzer interface."""

from abc import ABC, abstractmethod
from typing import Optional

from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.value_objects import HOAAnalysis, HOAEvidence


class HOAAnalyzer(ABC):
    """Abstract interface for scoring an HOA profile."""

    @abstractmethod
    async def analyze(
        self,
        profile: HOAProfile,
        evidence: Optional[HOAEvidence] = None,
    ) -> HOAAnalysis:
        """
        Produce scores, flags and buyer guidance for a profile.

        Parameters
        ----------
        profile
            Profile including its enrichment record
        evidence
            Research gathered for this run, if any

        Returns
        -------
        HOAAnalysis ready to be applied to the profile
        """
