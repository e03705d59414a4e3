"""Unit tests for how the API dependencies are built from Settings."""

import pytest

from hoa_scout.application.services import HOAEvidenceGatherer
from hoa_scout.infrastructure.integration.search import PerplexitySearchProvider
from hoa_scout.presentation.api import dependencies
from hoa_scout_config.settings import clear_settings_cache

CACHED = (
    dependencies.get_search_provider,
    dependencies.get_analyzer,
    dependencies.get_evidence_gatherer,
    dependencies.get_report_cache,
    dependencies.get_analysis_worker,
)


@pytest.fixture
def configure(monkeypatch):
    """Set environment variables and rebuild the cached dependencies."""

    def _configure(**env: str) -> None:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        clear_settings_cache()
        for dependency in CACHED:
            dependency.cache_clear()

    yield _configure

    clear_settings_cache()
    for dependency in CACHED:
        dependency.cache_clear()


class TestDependencies:
    """Tests for the settings-driven singletons."""

    def test_search_provider_uses_settings(self, configure):
        configure(PERPLEXITY_API_KEY="pplx-env")

        provider = dependencies.get_search_provider()

        assert isinstance(provider, PerplexitySearchProvider)
        assert provider.configured is True

    def test_evidence_gatherer_needs_search_key(self, configure):
        configure(PERPLEXITY_API_KEY="", ANALYSIS_GATHER_EVIDENCE="true")

        assert dependencies.get_evidence_gatherer() is None

    def test_evidence_gatherer_can_be_disabled(self, configure):
        configure(PERPLEXITY_API_KEY="pplx-env", ANALYSIS_GATHER_EVIDENCE="false")

        assert dependencies.get_evidence_gatherer() is None

    def test_evidence_gatherer_when_enabled(self, configure):
        configure(PERPLEXITY_API_KEY="pplx-env", ANALYSIS_GATHER_EVIDENCE="true")

        assert isinstance(dependencies.get_evidence_gatherer(), HOAEvidenceGatherer)

    def test_analyzer_uses_settings_model(self, configure):
        configure(ANTHROPIC_MODEL="claude-env")

        assert dependencies.get_analyzer().model_name == "claude-env"

    def test_report_cache_is_capped(self, configure):
        configure(REPORT_CACHE_MAX_ENTRIES="2")
        cache = dependencies.get_report_cache()

        for hoa_id in ("a", "b", "c"):
            cache.set(f"/reports/{hoa_id}", {"id": hoa_id})

        assert len(cache) == 2
        assert cache.get("/reports/a") is None

    def test_worker_history_comes_from_settings(self, configure):
        configure(ANALYSIS_JOB_HISTORY="7")

        assert dependencies.get_analysis_worker()._history == 7
