"""HOA domain: profiles, enrichment records and analysis results."""

from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.exceptions import (
    AnalysisQueueFullError,
    DistinctCitiesUnavailableError,
    HOANotFoundError,
)
from hoa_scout.domain.hoa.repositories import HOAProfileRepository
from hoa_scout.domain.hoa.services import HOAAnalyzer, HOASearchProvider

__all__ = [
    # Entities
    "HOAProfile",
    # Repositories & Interfaces
    "HOAAnalyzer",
    "HOAProfileRepository",
    "HOASearchProvider",
    # Exceptions
    "AnalysisQueueFullError",
    "DistinctCitiesUnavailableError",
    "HOANotFoundError",
]
