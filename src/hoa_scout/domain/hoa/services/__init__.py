from hoa_scout.domain.hoa.services.data_completeness import (
    calculate_data_completeness,
)
from hoa_scout.domain.hoa.services.enrichment_merge import (
    SOURCE_FAILED,
    SOURCE_LIMITED,
    SOURCE_WEB_SEARCH,
    EnrichmentMerge,
    mark_enrichment_failed,
    merge_enrichment,
    parse_monthly_fee,
)
from hoa_scout.domain.hoa.services.hoa_analyzer import HOAAnalyzer
from hoa_scout.domain.hoa.services.hoa_research_provider import HOAResearchProvider
from hoa_scout.domain.hoa.services.hoa_search_provider import HOASearchProvider

__all__ = [
    "SOURCE_FAILED",
    "SOURCE_LIMITED",
    "SOURCE_WEB_SEARCH",
    "EnrichmentMerge",
    "HOAAnalyzer",
    "HOAResearchProvider",
    "HOASearchProvider",
    "calculate_data_completeness",
    "mark_enrichment_failed",
    "merge_enrichment",
    "parse_monthly_fee",
]
