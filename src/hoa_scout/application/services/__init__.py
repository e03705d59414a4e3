"""Application services (process-wide stateful helpers)."""

from hoa_scout.application.services.analysis_worker import (
    AnalysisJob,
    AnalysisJobStatus,
    AnalysisRunner,
    AnalysisWorker,
)
from hoa_scout.application.services.cities_cache import CachedCities, CitiesCache
from hoa_scout.application.services.evidence_gatherer import HOAEvidenceGatherer

__all__ = [
    "AnalysisJob",
    "AnalysisJobStatus",
    "AnalysisRunner",
    "AnalysisWorker",
    "CachedCities",
    "CitiesCache",
    "HOAEvidenceGatherer",
]
