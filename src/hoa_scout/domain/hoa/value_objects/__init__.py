"""HOA value objects."""

from hoa_scout.domain.hoa.value_objects.enrichment_freshness import (
    DEFAULT_FRESHNESS_DAYS,
    EnrichmentFreshnessPolicy,
)
from hoa_scout.domain.hoa.value_objects.hoa_analysis import (
    HOAAnalysis,
    HOAFlag,
    HOAScores,
)
from hoa_scout.domain.hoa.value_objects.hoa_evidence import (
    HOAEvidence,
    ResearchFinding,
    ResearchTopic,
)
from hoa_scout.domain.hoa.value_objects.hoa_search_result import (
    HOASearchQuery,
    HOASearchResult,
)
from hoa_scout.domain.hoa.value_objects.hoa_summary import HOASummary
from hoa_scout.domain.hoa.value_objects.public_records import (
    Confidence,
    ContactInfo,
    ManagementCompanyInfo,
    ProviderResponse,
    PublicRecords,
)

__all__ = [
    "DEFAULT_FRESHNESS_DAYS",
    "Confidence",
    "ContactInfo",
    "EnrichmentFreshnessPolicy",
    "HOAAnalysis",
    "HOAEvidence",
    "HOAFlag",
    "HOAScores",
    "HOASearchQuery",
    "HOASearchResult",
    "HOASummary",
    "ManagementCompanyInfo",
    "ProviderResponse",
    "PublicRecords",
    "ResearchFinding",
    "ResearchTopic",
]
