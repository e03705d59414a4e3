"""Schemas for HOA search, browse, analysis and enrichment endpoints."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from hoa_scout.application.commands import EnrichmentOutcome
from hoa_scout.application.queries import EnrichmentStatus, Pagination
from hoa_scout.application.services import AnalysisJob
from hoa_scout.domain.hoa.value_objects import HOASummary


class HOASummaryResponse(BaseModel):
    """Projection of an HOA used in search and browse results."""

    id: str
    hoa_name: str
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    management_company: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_summary(cls, summary: HOASummary) -> "HOASummaryResponse":
        return cls(
            id=summary.id,
            hoa_name=summary.hoa_name,
            city=summary.city,
            state=summary.state,
            zip_code=summary.zip_code,
            management_company=summary.management_company,
            address=summary.address,
        )


class HOASearchResponse(BaseModel):
    success: bool = True
    results: list[HOASummaryResponse]
    count: int


class PaginationResponse(BaseModel):
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int
    total_pages: int
    has_more: bool

    @classmethod
    def from_pagination(cls, pagination: Pagination) -> "PaginationResponse":
        return cls(
            page=pagination.page,
            limit=pagination.limit,
            total=pagination.total,
            total_pages=pagination.total_pages,
            has_more=pagination.has_more,
        )


class HOABrowseResponse(BaseModel):
    success: bool = True
    results: list[HOASummaryResponse]
    pagination: PaginationResponse


class AnalyzeResponse(BaseModel):
    """Acknowledgement that an analysis was queued."""

    success: bool = True
    message: str = "Analysis triggered"


class AnalysisJobResponse(BaseModel):
    """State of the most recent analysis job for an HOA."""

    hoa_id: str
    status: str = Field(..., description="queued, running, completed or failed")
    submitted_at: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    overall_score: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def from_job(cls, job: AnalysisJob) -> "AnalysisJobResponse":
        return cls(
            hoa_id=job.hoa_id,
            status=job.status.value,
            submitted_at=job.submitted_at,
            started_at=job.started_at,
            finished_at=job.finished_at,
            overall_score=job.overall_score,
            error=job.error,
        )


class HOAStatusResponse(BaseModel):
    """Analysis completion, serialized as ``{"isComplete", "score"}``."""

    model_config = ConfigDict(populate_by_name=True)

    is_complete: bool = Field(..., alias="isComplete")
    score: Optional[float] = None


class EnrichmentResponse(BaseModel):
    """Outcome of an enrichment run."""

    success: bool
    cached: bool = False
    data: Optional[dict[str, Any]] = None
    found: bool = False
    error: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: EnrichmentOutcome) -> "EnrichmentResponse":
        return cls(
            success=outcome.success,
            cached=outcome.cached,
            data=outcome.data,
            found=outcome.found,
            error=outcome.error,
            code=outcome.error_code.value if outcome.error_code else None,
        )


class EnrichmentStatusResponse(BaseModel):
    """Best-effort projection of stored enrichment data."""

    enriched: bool = False
    enriched_at: Optional[datetime] = None
    found: bool = False
    confidence: str = "low"
    management_company: Optional[dict[str, Any]] = None
    contact_info: Optional[dict[str, Any]] = None
    subdivision_name: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def from_status(cls, status: EnrichmentStatus) -> "EnrichmentStatusResponse":
        company = status.management_company
        contact = status.contact_info
        return cls(
            enriched=status.enriched,
            enriched_at=status.enriched_at,
            found=status.found,
            confidence=status.confidence.value,
            management_company=company.to_dict() if company else None,
            contact_info=contact.to_dict() if contact else None,
            subdivision_name=status.subdivision_name,
            source=status.source,
        )
