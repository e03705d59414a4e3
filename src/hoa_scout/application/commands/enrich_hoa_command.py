"""Enrich an HOA profile with data found by a web search provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from hoa_scout.application.ports import ReportCache, report_path
from hoa_scout.domain.hoa.repositories import HOAProfileRepository
from hoa_scout.domain.hoa.services import (
    HOASearchProvider,
    mark_enrichment_failed,
    merge_enrichment,
)
from hoa_scout.domain.hoa.value_objects import (
    EnrichmentFreshnessPolicy,
    HOASearchQuery,
)
from hoa_scout.domain.shared.exceptions import ErrorCode
from hoa_scout.domain.shared.time import Clock, utc_now

if TYPE_CHECKING:
    from hoa_scout.application.factories import RepositoryFactory
    from hoa_scout.domain.hoa.entities import HOAProfile

logger = logging.getLogger(__name__)

HOA_NOT_FOUND_MESSAGE = "HOA not found"
SAVE_FAILED_MESSAGE = "Failed to save enrichment data"


@dataclass
class EnrichmentOutcome:
    """Result of an enrichment run.

    ``success`` is False only for not-found, persistence and unexpected
    errors. A failed provider lookup is still a successful run with
    ``found=False``.
    """

    success: bool
    cached: bool = False
    data: Optional[dict[str, Any]] = None
    found: bool = False
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None

    @classmethod
    def failure(cls, error: str, code: ErrorCode) -> EnrichmentOutcome:
        return cls(success=False, error=error, error_code=code)


class EnrichHOACommand:
    """Fetch, check freshness, search, merge, persist and invalidate."""

    def __init__(  # NOQA: PLR0913
        self,
        hoa_repository: HOAProfileRepository,
        search_provider: HOASearchProvider,
        report_cache: ReportCache,
        commit: Callable[[], Awaitable[None]],
        freshness_policy: Optional[EnrichmentFreshnessPolicy] = None,
        clock: Clock = utc_now,
    ):
        self._hoa_repo = hoa_repository
        self._provider = search_provider
        self._report_cache = report_cache
        self._commit = commit
        self._freshness = freshness_policy or EnrichmentFreshnessPolicy()
        self._clock = clock

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        search_provider: HOASearchProvider,
        report_cache: ReportCache,
        freshness_policy: Optional[EnrichmentFreshnessPolicy] = None,
    ) -> EnrichHOACommand:
        return cls(
            hoa_repository=factory.hoa_profile_repository(),
            search_provider=search_provider,
            report_cache=report_cache,
            commit=factory.session.commit,
            freshness_policy=freshness_policy,
        )

    async def execute(self, hoa_id: str, force: bool = False) -> EnrichmentOutcome:
        try:
            return await self._run(hoa_id, force)
        except Exception as e:
            logger.exception("Unexpected error enriching HOA %s", hoa_id)
            return EnrichmentOutcome.failure(str(e), ErrorCode.INTERNAL_ERROR)

    async def _run(self, hoa_id: str, force: bool) -> EnrichmentOutcome:
        logger.info("Enriching HOA %s (force=%s)", hoa_id, force)

        profile = await self._hoa_repo.find_by_id(hoa_id)
        if profile is None:
            return EnrichmentOutcome.failure(
                HOA_NOT_FOUND_MESSAGE,
                ErrorCode.HOA_NOT_FOUND,
            )

        now = self._clock()
        records = profile.public_records

        if not force and self._freshness.is_fresh(now, records):
            logger.info("Using cached enrichment for HOA %s", hoa_id)
            return EnrichmentOutcome(
                success=True,
                cached=True,
                data=records.to_dict(),
                found=records.found,
            )

        result = await self._provider.search(
            HOASearchQuery(
                hoa_name=profile.hoa_name,
                city=profile.city,
                state=profile.state,
                zip_code=profile.zip_code,
                address=profile.address,
            )
        )

        if not result.success:
            error = result.error or "Search failed"
            logger.warning("Search provider failed for HOA %s: %s", hoa_id, error)
            profile.apply_enrichment(
                mark_enrichment_failed(records, error, now),
                now=now,
            )
            if not await self._persist(profile):
                return EnrichmentOutcome.failure(
                    SAVE_FAILED_MESSAGE,
                    ErrorCode.PERSISTENCE_ERROR,
                )
            return EnrichmentOutcome(
                success=True,
                cached=False,
                data=profile.public_records.to_dict(),
                found=False,
            )

        merged = merge_enrichment(
            existing=records,
            result=result,
            stored_management_company=profile.management_company,
            stored_monthly_fee=profile.monthly_fee,
            now=now,
        )
        profile.apply_enrichment(
            merged.records,
            management_company=merged.management_company,
            monthly_fee=merged.monthly_fee,
            now=now,
        )

        if not await self._persist(profile):
            return EnrichmentOutcome.failure(
                SAVE_FAILED_MESSAGE,
                ErrorCode.PERSISTENCE_ERROR,
            )

        logger.info(
            "Enriched HOA %s (found=%s, source=%s)",
            hoa_id,
            result.found_info,
            merged.records.source,
        )
        return EnrichmentOutcome(
            success=True,
            cached=False,
            data=merged.records.to_dict(),
            found=result.found_info,
        )

    async def _persist(self, profile: HOAProfile) -> bool:
        try:
            await self._hoa_repo.save(profile)
            await self._commit()
        except Exception:
            logger.exception("Failed to save enrichment for HOA %s", profile.id)
            return False
        self._report_cache.invalidate(report_path(profile.id))
        return True
