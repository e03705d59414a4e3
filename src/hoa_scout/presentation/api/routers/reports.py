"""Report router: the per-HOA report document, cached by path."""

import logging

from fastapi import APIRouter

from hoa_scout.application.ports import report_path
from hoa_scout.application.queries import GetHOAReportQuery, HOAReport
from hoa_scout.presentation.api.dependencies import RepoFactory, ReportCacheDep
from hoa_scout.presentation.api.schemas import (
    EnrichmentStatusResponse,
    ErrorResponse,
    FlagResponse,
    OverallScoreResponse,
    ReportResponse,
    ScoreBreakdownResponse,
)
from hoa_scout.presentation.formatting import (
    format_currency,
    format_date,
    format_number,
    score_bg_color,
    score_color,
    score_label,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _report_to_response(report: HOAReport) -> ReportResponse:
    profile = report.profile
    fee = profile.monthly_fee
    score = profile.overall_score
    scores = profile.scores

    return ReportResponse(
        id=profile.id,
        hoa_name=profile.hoa_name,
        address=profile.address,
        city=profile.city,
        state=profile.state,
        zip_code=profile.zip_code,
        management_company=profile.management_company,
        monthly_fee=float(fee) if fee is not None else None,
        monthly_fee_display=format_currency(fee),
        total_units=profile.total_units,
        total_units_display=format_number(profile.total_units),
        score=(
            OverallScoreResponse(
                value=score,
                label=score_label(score),
                color_class=score_color(score),
                bg_color_class=score_bg_color(score),
            )
            if score is not None
            else None
        ),
        scores=ScoreBreakdownResponse(
            financial_health=scores.financial_health,
            restrictiveness=scores.restrictiveness,
            management_quality=scores.management_quality,
            community_sentiment=scores.community_sentiment,
            legal_risk=scores.legal_risk,
        ),
        one_sentence_summary=profile.one_sentence_summary,
        red_flags=[FlagResponse.from_flag(f) for f in profile.red_flags],
        yellow_flags=[FlagResponse.from_flag(f) for f in profile.yellow_flags],
        green_flags=[FlagResponse.from_flag(f) for f in profile.green_flags],
        questions_to_ask=list(profile.questions_to_ask),
        documents_to_request=list(profile.documents_to_request),
        data_completeness=profile.data_completeness,
        enrichment=EnrichmentStatusResponse.from_status(report.enrichment),
        analysis_pending=report.analysis_pending,
        last_updated=profile.last_updated,
        last_updated_display=format_date(profile.last_updated, "relative"),
    )


@router.get(
    "/{hoa_id}",
    summary="Get HOA report",
    responses={
        200: {"description": "Report document"},
        404: {"model": ErrorResponse, "description": "HOA not found"},
    },
)
async def get_report(
    hoa_id: str,
    factory: RepoFactory,
    cache: ReportCacheDep,
) -> ReportResponse:
    """
    Report for one HOA: profile, score, flags and enrichment status.

    Rendered documents are cached per path and dropped whenever the HOA is
    enriched or analyzed.
    """
    path = report_path(hoa_id)
    cached = cache.get(path)
    if cached is not None:
        logger.debug("Serving cached report %s", path)
        return ReportResponse.model_validate(cached)

    report = await GetHOAReportQuery.from_factory(factory).execute(hoa_id)
    response = _report_to_response(report)
    cache.set(path, response.model_dump(mode="json"))
    return response
