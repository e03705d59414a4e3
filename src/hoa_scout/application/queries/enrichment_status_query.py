"""Enrichment status query - best-effort projection of stored enrichment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from hoa_scout.domain.hoa.repositories import HOAProfileRepository
from hoa_scout.domain.hoa.value_objects import (
    Confidence,
    ContactInfo,
    ManagementCompanyInfo,
)

if TYPE_CHECKING:
    from hoa_scout.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


@dataclass
class EnrichmentStatus:
    enriched: bool = False
    enriched_at: Optional[datetime] = None
    found: bool = False
    confidence: Confidence = Confidence.LOW
    management_company: Optional[ManagementCompanyInfo] = None
    contact_info: Optional[ContactInfo] = None
    subdivision_name: Optional[str] = None
    source: Optional[str] = None


class EnrichmentStatusQuery:
    """Project the enrichment fields of a profile.

    Never raises: a missing profile or a failed lookup yields the default
    "not enriched" status.
    """

    def __init__(self, hoa_repository: HOAProfileRepository):
        self._hoa_repo = hoa_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> EnrichmentStatusQuery:
        return cls(hoa_repository=factory.hoa_profile_repository())

    async def execute(self, hoa_id: str) -> EnrichmentStatus:
        try:
            profile = await self._hoa_repo.find_by_id(hoa_id)
        except Exception as e:
            logger.warning("Could not read enrichment status for %s: %s", hoa_id, e)
            return EnrichmentStatus()

        if profile is None:
            return EnrichmentStatus()

        records = profile.public_records
        return EnrichmentStatus(
            enriched=records.enriched,
            enriched_at=records.enriched_at,
            found=records.found,
            confidence=records.confidence or Confidence.LOW,
            management_company=records.management_company,
            contact_info=records.contact_info,
            subdivision_name=records.subdivision_name,
            source=records.source,
        )
