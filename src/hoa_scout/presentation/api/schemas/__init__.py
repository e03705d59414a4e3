"""Pydantic schemas for API request/response models."""

from hoa_scout.presentation.api.schemas.cities import CitiesResponse
from hoa_scout.presentation.api.schemas.common import ErrorResponse, HealthResponse
from hoa_scout.presentation.api.schemas.hoa import (
    AnalysisJobResponse,
    AnalyzeResponse,
    EnrichmentResponse,
    EnrichmentStatusResponse,
    HOABrowseResponse,
    HOASearchResponse,
    HOAStatusResponse,
    HOASummaryResponse,
    PaginationResponse,
)
from hoa_scout.presentation.api.schemas.reports import (
    FlagResponse,
    OverallScoreResponse,
    ReportResponse,
    ScoreBreakdownResponse,
)

__all__ = [
    # Common schemas
    "ErrorResponse",
    "HealthResponse",
    # City schemas
    "CitiesResponse",
    # HOA schemas
    "AnalysisJobResponse",
    "AnalyzeResponse",
    "EnrichmentResponse",
    "EnrichmentStatusResponse",
    "HOABrowseResponse",
    "HOASearchResponse",
    "HOAStatusResponse",
    "HOASummaryResponse",
    "PaginationResponse",
    # Report schemas
    "FlagResponse",
    "OverallScoreResponse",
    "ReportResponse",
    "ScoreBreakdownResponse",
]
