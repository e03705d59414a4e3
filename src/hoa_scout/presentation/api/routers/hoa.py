"""HOA router: search, browse, analysis trigger/polling and enrichment."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from hoa_scout.application.commands import EnrichHOACommand
from hoa_scout.application.queries import (
    BrowseHOAsQuery,
    EnrichmentStatusQuery,
    GetHOAStatusQuery,
    SearchHOAsQuery,
)
from hoa_scout.domain.shared.exceptions import ErrorCode, ValidationError
from hoa_scout.presentation.api.dependencies import (
    FreshnessPolicy,
    RepoFactory,
    ReportCacheDep,
    SearchProvider,
    Worker,
)
from hoa_scout.presentation.api.exception_handlers import status_for_error_code
from hoa_scout.presentation.api.schemas import (
    AnalysisJobResponse,
    AnalyzeResponse,
    EnrichmentResponse,
    EnrichmentStatusResponse,
    ErrorResponse,
    HOABrowseResponse,
    HOASearchResponse,
    HOAStatusResponse,
    HOASummaryResponse,
    PaginationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Limits and pages arrive as raw strings; invalid values fall back to defaults.
SearchText = Annotated[Optional[str], Query(description="Part of the HOA name")]
LimitParam = Annotated[Optional[str], Query(description="Maximum results")]
PageParam = Annotated[Optional[str], Query(description="Page number, from 1")]
CityFilter = Annotated[Optional[str], Query(description="City (case-insensitive)")]
ZipFilter = Annotated[Optional[str], Query(alias="zip", description="Zip code")]


def _require_hoa_id(hoa_id: str) -> str:
    hoa_id = hoa_id.strip()
    if not hoa_id:
        msg = "HOA ID required"
        raise ValidationError(msg, code=ErrorCode.MISSING_HOA_ID)
    return hoa_id


@router.get(
    "/search",
    summary="Search HOAs by name",
    responses={
        200: {"description": "Matching HOAs ordered by name"},
        400: {"model": ErrorResponse, "description": "Query shorter than 2 characters"},
    },
)
async def search_hoas(
    factory: RepoFactory,
    q: SearchText = None,
    limit: LimitParam = None,
) -> HOASearchResponse:
    """
    Case-insensitive substring search over HOA names.

    `limit` defaults to 10 and is capped at 50.
    """
    result = await SearchHOAsQuery.from_factory(factory).execute(q, limit)
    return HOASearchResponse(
        results=[HOASummaryResponse.from_summary(s) for s in result.results],
        count=result.count,
    )


@router.get(
    "/browse",
    summary="Browse HOAs by location",
    responses={
        200: {"description": "One page of HOAs in the city and/or zip code"},
        400: {"model": ErrorResponse, "description": "Neither city nor zip given"},
    },
)
async def browse_hoas(
    factory: RepoFactory,
    city: CityFilter = None,
    zip_code: ZipFilter = None,
    page: PageParam = None,
    limit: LimitParam = None,
) -> HOABrowseResponse:
    """
    List HOAs in a city and/or zip code, ordered by name.

    `limit` defaults to 20 and is capped at 100.
    """
    result = await BrowseHOAsQuery.from_factory(factory).execute(
        city=city,
        zip_code=zip_code,
        page=page,
        limit=limit,
    )
    return HOABrowseResponse(
        results=[HOASummaryResponse.from_summary(s) for s in result.results],
        pagination=PaginationResponse.from_pagination(result.pagination),
    )


@router.post(
    "/{hoa_id}/analyze",
    summary="Trigger HOA analysis",
    responses={
        200: {"description": "Analysis queued"},
        400: {"model": ErrorResponse, "description": "Missing HOA id"},
        503: {"model": ErrorResponse, "description": "Analysis queue is full"},
    },
)
async def trigger_analysis(hoa_id: str, worker: Worker) -> AnalyzeResponse:
    """
    Queue a background analysis and return immediately.

    Poll `/status` for the score or `/analysis` for the job state.
    A job already queued or running for the same HOA is reused.
    """
    worker.submit(_require_hoa_id(hoa_id))
    return AnalyzeResponse()


@router.get(
    "/{hoa_id}/analysis",
    summary="Get analysis job state",
    responses={
        200: {"description": "Latest analysis job"},
        404: {
            "model": ErrorResponse,
            "description": "No analysis was submitted for this HOA",
        },
    },
)
async def get_analysis_job(hoa_id: str, worker: Worker) -> AnalysisJobResponse:
    job = worker.get_job(_require_hoa_id(hoa_id))
    if job is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No analysis job for this HOA",
        )
    return AnalysisJobResponse.from_job(job)


@router.get(
    "/{hoa_id}/status",
    summary="Get analysis status",
    responses={
        200: {"description": "Whether an overall score exists"},
        404: {"model": ErrorResponse, "description": "HOA not found"},
    },
)
async def get_status(hoa_id: str, factory: RepoFactory) -> HOAStatusResponse:
    """Report `isComplete: true` as soon as the overall score is set."""
    result = await GetHOAStatusQuery.from_factory(factory).execute(
        _require_hoa_id(hoa_id),
    )
    return HOAStatusResponse(is_complete=result.is_complete, score=result.score)


@router.post(
    "/{hoa_id}/enrich",
    summary="Enrich HOA from web search",
    responses={
        200: {"description": "Enrichment result (fresh or cached)"},
        404: {"model": EnrichmentResponse, "description": "HOA not found"},
        503: {
            "model": EnrichmentResponse,
            "description": "Enrichment could not be saved",
        },
    },
)
async def enrich_hoa(  # NOQA: PLR0913
    hoa_id: str,
    response: Response,
    factory: RepoFactory,
    provider: SearchProvider,
    report_cache: ReportCacheDep,
    freshness: FreshnessPolicy,
    force: bool = False,
) -> EnrichmentResponse:
    """
    Enrich the HOA with management, contact and fee data.

    Enrichment younger than 30 days is returned as `cached` unless `force`
    is set. A failed provider lookup is recorded and reported with
    `found: false`.
    """
    command = EnrichHOACommand.from_factory(
        factory,
        search_provider=provider,
        report_cache=report_cache,
        freshness_policy=freshness,
    )
    outcome = await command.execute(_require_hoa_id(hoa_id), force=force)
    if not outcome.success:
        response.status_code = status_for_error_code(outcome.error_code)
    return EnrichmentResponse.from_outcome(outcome)


@router.get(
    "/{hoa_id}/enrichment",
    summary="Get enrichment status",
    responses={
        200: {"description": "Stored enrichment projection"},
    },
)
async def get_enrichment_status(
    hoa_id: str,
    factory: RepoFactory,
) -> EnrichmentStatusResponse:
    """Never fails: unknown HOAs report `enriched: false`."""
    result = await EnrichmentStatusQuery.from_factory(factory).execute(hoa_id)
    return EnrichmentStatusResponse.from_status(result)
