"""FastAPI dependency injection for the HOA Scout API.

Provides dependencies for:
- Database sessions and repository factories
- Process-wide caches (cities, rendered reports)
- External service clients (web search, analysis)
- The background analysis worker
"""

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from hoa_scout.application.commands import AnalyzeHOACommand
from hoa_scout.application.ports import ReportCache
from hoa_scout.application.services import (
    AnalysisWorker,
    CitiesCache,
    HOAEvidenceGatherer,
)
from hoa_scout.domain.hoa.services import HOAAnalyzer, HOASearchProvider
from hoa_scout.domain.hoa.value_objects import EnrichmentFreshnessPolicy
from hoa_scout.infrastructure.cache import InMemoryReportCache
from hoa_scout.infrastructure.integration.analysis import AnthropicHOAAnalyzer
from hoa_scout.infrastructure.integration.search import PerplexitySearchProvider
from hoa_scout.infrastructure.persistence.sqlalchemy.init_db import (
    create_engine_for_url,
    create_session_maker,
)
from hoa_scout.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from hoa_scout.presentation.api.config import get_api_settings

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests
    and by the analysis worker.

    Returns
    -------
    AsyncEngine instance
    """
    return create_engine_for_url(get_api_settings().database_url)


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return create_session_maker(get_engine())


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Uncommitted work is rolled back when the request fails.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_repository_factory(session: DBSession) -> SQLAlchemyRepositoryFactory:
    """Repository factory bound to the request session."""
    return SQLAlchemyRepositoryFactory(session)


RepoFactory = Annotated[SQLAlchemyRepositoryFactory, Depends(get_repository_factory)]


# -----------------------------------------------------------------------------
# Caches (process-wide singletons)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_cities_cache() -> CitiesCache:
    ttl = timedelta(seconds=get_api_settings().cities_cache_ttl_seconds)
    return CitiesCache(ttl=ttl)


@lru_cache(maxsize=1)
def get_report_cache() -> ReportCache:
    settings = get_api_settings()
    return InMemoryReportCache(
        ttl_seconds=settings.report_cache_ttl_seconds,
        max_entries=settings.report_cache_max_entries,
    )


def get_freshness_policy() -> EnrichmentFreshnessPolicy:
    return EnrichmentFreshnessPolicy.from_days(
        get_api_settings().enrichment_freshness_days,
    )


CitiesCacheDep = Annotated[CitiesCache, Depends(get_cities_cache)]
ReportCacheDep = Annotated[ReportCache, Depends(get_report_cache)]
FreshnessPolicy = Annotated[EnrichmentFreshnessPolicy, Depends(get_freshness_policy)]


# -----------------------------------------------------------------------------
# External services
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_search_provider() -> PerplexitySearchProvider:
    """
    Get the shared web search provider (singleton).

    The provider keeps one HTTP connection pool for the process lifetime;
    it is closed in the application lifespan.
    """
    provider = PerplexitySearchProvider.from_settings(get_api_settings())
    if not provider.configured:
        logger.warning("PERPLEXITY_API_KEY not set, enrichment lookups will fail")
    return provider


@lru_cache(maxsize=1)
def get_analyzer() -> HOAAnalyzer:
    return AnthropicHOAAnalyzer.from_settings(get_api_settings())


@lru_cache(maxsize=1)
def get_evidence_gatherer() -> Optional[HOAEvidenceGatherer]:
    """
    Get the research step run before each analysis, if enabled.

    Returns None when ``ANALYSIS_GATHER_EVIDENCE`` is off or the search
    provider has no API key, so analyses then use stored data only.
    """
    if not get_api_settings().analysis_gather_evidence:
        return None
    provider = get_search_provider()
    if not provider.configured:
        return None
    return HOAEvidenceGatherer(search_provider=provider, research_provider=provider)


SearchProvider = Annotated[HOASearchProvider, Depends(get_search_provider)]


# -----------------------------------------------------------------------------
# Background analysis
# -----------------------------------------------------------------------------


async def run_analysis(hoa_id: str) -> Optional[float]:
    """Analyze one HOA in its own session; used by the analysis worker."""
    async with get_session_maker()() as session:
        command = AnalyzeHOACommand.from_factory(
            SQLAlchemyRepositoryFactory(session),
            analyzer=get_analyzer(),
            report_cache=get_report_cache(),
            evidence_gatherer=get_evidence_gatherer(),
        )
        result = await command.execute(hoa_id)
    return result.overall_score


@lru_cache(maxsize=1)
def get_analysis_worker() -> AnalysisWorker:
    settings = get_api_settings()
    return AnalysisWorker(
        runner=run_analysis,
        queue_size=settings.analysis_queue_size,
        workers=settings.analysis_workers,
        history=settings.analysis_job_history,
    )


Worker = Annotated[AnalysisWorker, Depends(get_analysis_worker)]
