"""Analysis completion status of an HOA profile."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from hoa_scout.domain.hoa.exceptions import HOANotFoundError
from hoa_scout.domain.hoa.repositories import HOAProfileRepository

if TYPE_CHECKING:
    from hoa_scout.application.factories import RepositoryFactory


@dataclass
class HOAStatus:
    is_complete: bool
    score: Optional[float]


class GetHOAStatusQuery:
    """Report whether an analysis has produced an overall score."""

    def __init__(self, hoa_repository: HOAProfileRepository):
        self._hoa_repo = hoa_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> GetHOAStatusQuery:
        return cls(hoa_repository=factory.hoa_profile_repository())

    async def execute(self, hoa_id: str) -> HOAStatus:
        exists, score = await self._hoa_repo.get_overall_score(hoa_id)
        if not exists:
            raise HOANotFoundError(hoa_id)
        return HOAStatus(is_complete=score is not None, score=score)
