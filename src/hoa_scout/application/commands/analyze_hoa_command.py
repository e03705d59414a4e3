"""Run an analyzer over an HOA profile and store the scores."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from hoa_scout.application.ports import ReportCache, report_path
from hoa_scout.application.services.evidence_gatherer import HOAEvidenceGatherer
from hoa_scout.domain.hoa.exceptions import HOANotFoundError
from hoa_scout.domain.hoa.repositories import HOAProfileRepository
from hoa_scout.domain.hoa.services import HOAAnalyzer, calculate_data_completeness
from hoa_scout.domain.hoa.value_objects import HOAAnalysis
from hoa_scout.domain.shared.time import Clock, utc_now

if TYPE_CHECKING:
    from hoa_scout.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    hoa_id: str
    overall_score: float
    data_completeness: int
    analyzer: str


def analysis_to_dict(analysis: HOAAnalysis) -> dict:
    """Raw analysis document kept in the ``ai_analysis`` column."""
    scores = analysis.scores
    return {
        **analysis.extra,
        "analyzer": analysis.analyzer,
        "overall_score": analysis.overall_score,
        "one_sentence_summary": analysis.one_sentence_summary,
        "scores": {
            "financial_health": scores.financial_health,
            "restrictiveness": scores.restrictiveness,
            "management_quality": scores.management_quality,
            "community_sentiment": scores.community_sentiment,
            "legal_risk": scores.legal_risk,
        },
        "data_completeness": analysis.data_completeness,
    }


class AnalyzeHOACommand:
    """Analyze one HOA profile and persist the outcome.

    With an evidence gatherer, web research runs first; it is passed to the
    analyzer and kept under ``"evidence"`` in the stored analysis document.
    """

    def __init__(
        self,
        hoa_repository: HOAProfileRepository,
        analyzer: HOAAnalyzer,
        report_cache: ReportCache,
        commit: Callable[[], Awaitable[None]],
        clock: Clock = utc_now,
        evidence_gatherer: Optional[HOAEvidenceGatherer] = None,
    ):
        self._hoa_repo = hoa_repository
        self._analyzer = analyzer
        self._report_cache = report_cache
        self._commit = commit
        self._clock = clock
        self._evidence_gatherer = evidence_gatherer

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        analyzer: HOAAnalyzer,
        report_cache: ReportCache,
        evidence_gatherer: Optional[HOAEvidenceGatherer] = None,
    ) -> AnalyzeHOACommand:
        return cls(
            hoa_repository=factory.hoa_profile_repository(),
            analyzer=analyzer,
            report_cache=report_cache,
            commit=factory.session.commit,
            evidence_gatherer=evidence_gatherer,
        )

    async def execute(self, hoa_id: str) -> AnalysisResult:
        profile = await self._hoa_repo.find_by_id(hoa_id)
        if profile is None:
            raise HOANotFoundError(hoa_id)

        evidence = None
        if self._evidence_gatherer is not None:
            evidence = await self._evidence_gatherer.gather(profile)

        analysis = await self._analyzer.analyze(profile, evidence)
        completeness = calculate_data_completeness(profile)

        document = analysis_to_dict(analysis)
        if evidence is not None:
            document["evidence"] = evidence.to_dict()

        profile.apply_analysis(
            analysis,
            data_completeness=completeness,
            ai_analysis=document,
            now=self._clock(),
        )
        await self._hoa_repo.save(profile)
        await self._commit()
        self._report_cache.invalidate(report_path(hoa_id))

        logger.info(
            "Analysis stored for HOA %s (score=%.1f, completeness=%d%%)",
            hoa_id,
            analysis.overall_score,
            completeness,
        )
        return AnalysisResult(
            hoa_id=hoa_id,
            overall_score=analysis.overall_score,
            data_completeness=completeness,
            analyzer=analysis.analyzer,
        )
