"""Application queries (read side)."""

from hoa_scout.application.queries.browse_hoas_query import (
    BrowseHOAsQuery,
    BrowseHOAsResult,
    Pagination,
)
from hoa_scout.application.queries.enrichment_status_query import (
    EnrichmentStatus,
    EnrichmentStatusQuery,
)
from hoa_scout.application.queries.get_hoa_report_query import (
    GetHOAReportQuery,
    HOAReport,
)
from hoa_scout.application.queries.get_hoa_status_query import (
    GetHOAStatusQuery,
    HOAStatus,
)
from hoa_scout.application.queries.list_cities_query import (
    ListCitiesQuery,
    normalize_cities,
)
from hoa_scout.application.queries.search_hoas_query import (
    SearchHOAsQuery,
    SearchHOAsResult,
)

__all__ = [
    "BrowseHOAsQuery",
    "BrowseHOAsResult",
    "EnrichmentStatus",
    "EnrichmentStatusQuery",
    "GetHOAReportQuery",
    "GetHOAStatusQuery",
    "HOAReport",
    "HOAStatus",
    "ListCitiesQuery",
    "Pagination",
    "SearchHOAsQuery",
    "SearchHOAsResult",
    "normalize_cities",
]
