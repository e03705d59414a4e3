"""Pytest fixtures for API integration tests."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from hoa_scout.application.commands import AnalyzeHOACommand
from hoa_scout.application.services import AnalysisWorker, CitiesCache
from hoa_scout.domain.hoa.services import HOASearchProvider
from hoa_scout.domain.hoa.value_objects import HOASearchQuery, HOASearchResult
from hoa_scout.infrastructure.cache import InMemoryReportCache
from hoa_scout.infrastructure.integration.analysis import RuleBasedHOAAnalyzer
from hoa_scout.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from hoa_scout.presentation.api.app import create_app
from hoa_scout.presentation.api.dependencies import (
    get_analysis_worker,
    get_cities_cache,
    get_db_session,
    get_report_cache,
    get_search_provider,
)
from hoa_scout_config.settings import Settings

FOUND_RESULT = HOASearchResult(
    success=True,
    found_info=True,
    management_company="FirstService Residential",
    phone="305-555-0100",
    website="https://palmgrove.example.com",
    subdivision_name="Palm Grove",
    monthly_fee="$310/month",
    hoa_exists=True,
    found_online=True,
    sources=("https://sunbiz.org/palm-grove",),
    search_strategy="Palm Grove HOA",
    response_time_ms=840,
)


class FakeSearchProvider(HOASearchProvider):
    """Search provider returning a canned result and recording queries."""

    def __init__(self, result: HOASearchResult = FOUND_RESULT):
        self.result = result
        self.queries: list[HOASearchQuery] = []

    @property
    def name(self) -> str:
        return "Fake"

    async def search(self, query: HOASearchQuery) -> HOASearchResult:
        self.queries.append(query)
        return self.result

    async def close(self) -> None:
        return None


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
    )


@pytest.fixture
def search_provider() -> FakeSearchProvider:
    return FakeSearchProvider()


@pytest.fixture
def report_cache() -> InMemoryReportCache:
    return InMemoryReportCache()


@pytest.fixture
def analysis_worker() -> AnalysisWorker:
    """Worker that is never started, so submitted jobs stay queued."""
    return AnalysisWorker(runner=AsyncMock(return_value=None), queue_size=2)


@pytest.fixture
def test_client(
    api_settings,
    db_session_maker,
    search_provider,
    report_cache,
    analysis_worker,
) -> TestClient:
    """Create a test client backed by the seeded SQLite database."""
    app = create_app(settings=api_settings)
    cities_cache = CitiesCache()

    async def override_get_db_session():
        async with db_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_search_provider] = lambda: search_provider
    app.dependency_overrides[get_report_cache] = lambda: report_cache
    app.dependency_overrides[get_cities_cache] = lambda: cities_cache
    app.dependency_overrides[get_analysis_worker] = lambda: analysis_worker

    # No context manager: the lifespan (table creation, worker start) is skipped
    return TestClient(app)


@pytest.fixture
def analyze_now(db_session_maker, report_cache):
    """Run the rule-based analysis for one HOA synchronously."""

    async def _analyze(hoa_id: str) -> float:
        async with db_session_maker() as session:
            command = AnalyzeHOACommand.from_factory(
                SQLAlchemyRepositoryFactory(session),
                analyzer=RuleBasedHOAAnalyzer(),
                report_cache=report_cache,
            )
            result = await command.execute(hoa_id)
        return result.overall_score

    def run(hoa_id: str) -> float:
        return asyncio.run(_analyze(hoa_id))

    return run
