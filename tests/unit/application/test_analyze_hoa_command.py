"""Unit tests for AnalyzeHOACommand."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from hoa_scout.application.commands import AnalyzeHOACommand
from hoa_scout.application.commands.analyze_hoa_command import analysis_to_dict
from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.exceptions import HOANotFoundError
from hoa_scout.domain.hoa.value_objects import (
    HOAAnalysis,
    HOAEvidence,
    HOAScores,
    ResearchFinding,
    ResearchTopic,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _analysis() -> HOAAnalysis:
    return HOAAnalysis(
        overall_score=6.3,
        scores=HOAScores(financial_health=5, legal_risk=8),
        one_sentence_summary="Limited data available.",
        data_completeness=25,
        analyzer="rule_based",
    )


@pytest.fixture
def repo():
    return AsyncMock()


@pytest.fixture
def analyzer():
    mock = AsyncMock()
    mock.analyze.return_value = _analysis()
    return mock


class TestAnalyzeHOACommand:
    """Tests for analysis persistence."""

    @pytest.mark.asyncio
    async def test_unknown_hoa_raises(self, repo, analyzer):
        repo.find_by_id.return_value = None
        command = AnalyzeHOACommand(repo, analyzer, MagicMock(), AsyncMock())

        with pytest.raises(HOANotFoundError):
            await command.execute("missing")

        analyzer.analyze.assert_not_called()

    @pytest.mark.asyncio
    async def test_stores_scores_and_invalidates_report(self, repo, analyzer):
        profile = HOAProfile(
            id="hoa-1",
            hoa_name="Palm Grove HOA",
            monthly_fee=Decimal("150"),
        )
        repo.find_by_id.return_value = profile
        cache = MagicMock()
        commit = AsyncMock()
        command = AnalyzeHOACommand(repo, analyzer, cache, commit, clock=lambda: NOW)

        result = await command.execute("hoa-1")

        assert result.overall_score == 6.3
        assert result.analyzer == "rule_based"
        # Completeness is computed from the profile, not taken from the analyzer
        assert result.data_completeness == 20
        assert profile.overall_score == 6.3
        assert profile.ai_analysis["data_completeness"] == 25
        assert profile.last_updated == NOW
        repo.save.assert_awaited_once_with(profile)
        commit.assert_awaited_once()
        cache.invalidate.assert_called_once_with("/reports/hoa-1")

    @pytest.mark.asyncio
    async def test_evidence_is_analyzed_and_stored(self, repo, analyzer):
        profile = HOAProfile(id="hoa-1", hoa_name="Palm Grove HOA")
        repo.find_by_id.return_value = profile
        evidence = HOAEvidence(
            findings=(
                ResearchFinding(
                    topic=ResearchTopic.RULES,
                    success=True,
                    found_info=True,
                    data={"ccrsAvailableOnline": True},
                ),
            ),
        )
        gatherer = AsyncMock()
        gatherer.gather.return_value = evidence
        command = AnalyzeHOACommand(
            repo,
            analyzer,
            MagicMock(),
            AsyncMock(),
            evidence_gatherer=gatherer,
        )

        await command.execute("hoa-1")

        gatherer.gather.assert_awaited_once_with(profile)
        analyzer.analyze.assert_awaited_once_with(profile, evidence)
        stored = profile.ai_analysis["evidence"]
        assert stored["rules"]["data"] == {"ccrsAvailableOnline": True}
        assert stored["rules"]["found_info"] is True

    @pytest.mark.asyncio
    async def test_without_gatherer_no_evidence_is_stored(self, repo, analyzer):
        profile = HOAProfile(id="hoa-1", hoa_name="Palm Grove HOA")
        repo.find_by_id.return_value = profile
        command = AnalyzeHOACommand(repo, analyzer, MagicMock(), AsyncMock())

        await command.execute("hoa-1")

        analyzer.analyze.assert_awaited_once_with(profile, None)
        assert "evidence" not in profile.ai_analysis


class TestAnalysisToDict:
    """Tests for the stored analysis document."""

    def test_includes_scores_and_extra(self):
        analysis = HOAAnalysis(
            overall_score=7.0,
            scores=HOAScores(restrictiveness=3),
            one_sentence_summary="ok",
            extra={"model": "x"},
        )

        document = analysis_to_dict(analysis)

        assert document["model"] == "x"
        assert document["overall_score"] == 7.0
        assert document["scores"]["restrictiveness"] == 3
        assert document["scores"]["financial_health"] is None
