"""Load everything needed to render an HOA report page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hoa_scout.application.queries.enrichment_status_query import (
    EnrichmentStatus,
    EnrichmentStatusQuery,
)
from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.exceptions import HOANotFoundError
from hoa_scout.domain.hoa.repositories import HOAProfileRepository

if TYPE_CHECKING:
    from hoa_scout.application.factories import RepositoryFactory


@dataclass
class HOAReport:
    profile: HOAProfile
    enrichment: EnrichmentStatus

    @property
    def analysis_pending(self) -> bool:
        return not self.profile.is_analyzed()


class GetHOAReportQuery:
    def __init__(self, hoa_repository: HOAProfileRepository):
        self._hoa_repo = hoa_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> GetHOAReportQuery:
        return cls(hoa_repository=factory.hoa_profile_repository())

    async def execute(self, hoa_id: str) -> HOAReport:
        profile = await self._hoa_repo.find_by_id(hoa_id)
        if profile is None:
            raise HOANotFoundError(hoa_id)
        enrichment = await EnrichmentStatusQuery(self._hoa_repo).execute(hoa_id)
        return HOAReport(profile=profile, enrichment=enrichment)
