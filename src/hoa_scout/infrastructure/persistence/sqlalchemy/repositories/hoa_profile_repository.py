"""SQLAlchemy implementation of HOAProfileRepository."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.exceptions import DistinctCitiesUnavailableError
from hoa_scout.domain.hoa.repositories import CITY_SCAN_LIMIT, HOAProfileRepository
from hoa_scout.domain.hoa.value_objects import (
    HOAFlag,
    HOAScores,
    HOASummary,
    PublicRecords,
)
from hoa_scout.domain.shared.time import ensure_tz_aware
from hoa_scout.infrastructure.persistence.sqlalchemy.models import HOAProfileModel

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so they match literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _flags(values: Optional[list[Any]]) -> tuple[HOAFlag, ...]:
    flags = (HOAFlag.from_dict(value) for value in values or [])
    return tuple(flag for flag in flags if flag is not None)


def _strings(values: Optional[list[Any]]) -> tuple[str, ...]:
    return tuple(str(value) for value in values or [] if value)


def _legal_risk(ai_analysis: Optional[dict[str, Any]]) -> Optional[float]:
    # No column of its own; kept in the raw analysis document.
    scores = (ai_analysis or {}).get("scores")
    if not isinstance(scores, dict) or scores.get("legal_risk") is None:
        return None
    return float(scores["legal_risk"])


_SUMMARY_COLUMNS = (
    HOAProfileModel.id,
    HOAProfileModel.hoa_name,
    HOAProfileModel.city,
    HOAProfileModel.state,
    HOAProfileModel.zip_code,
    HOAProfileModel.management_company,
    HOAProfileModel.address,
)


class HOAProfileRepositorySQLAlchemy(HOAProfileRepository):
    """SQLAlchemy implementation of HOAProfileRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, profile: HOAProfile) -> None:
        existing = await self._session.get(HOAProfileModel, profile.id)
        if existing is None:
            existing = HOAProfileModel(id=profile.id, created_at=profile.created_at)
            self._session.add(existing)

        scores = profile.scores
        existing.hoa_name = profile.hoa_name
        existing.address = profile.address
        existing.city = profile.city
        existing.state = profile.state
        existing.zip_code = profile.zip_code
        existing.monthly_fee = profile.monthly_fee
        existing.total_units = profile.total_units
        existing.management_company = profile.management_company
        existing.overall_score = profile.overall_score
        existing.financial_health_score = scores.financial_health
        existing.restrictiveness_score = scores.restrictiveness
        existing.management_quality_score = scores.management_quality
        existing.community_sentiment_score = scores.community_sentiment
        existing.one_sentence_summary = profile.one_sentence_summary
        existing.public_records = profile.public_records.to_dict()
        existing.ai_analysis = profile.ai_analysis
        existing.red_flags = [flag.to_dict() for flag in profile.red_flags]
        existing.yellow_flags = [flag.to_dict() for flag in profile.yellow_flags]
        existing.green_flags = [flag.to_dict() for flag in profile.green_flags]
        existing.questions_to_ask = list(profile.questions_to_ask)
        existing.documents_to_request = list(profile.documents_to_request)
        existing.data_completeness = profile.data_completeness
        existing.last_updated = profile.last_updated

        await self._session.flush()

    async def find_by_id(self, hoa_id: str) -> Optional[HOAProfile]:
        stmt = select(HOAProfileModel).where(HOAProfileModel.id == hoa_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._model_to_domain(model)

    async def get_overall_score(self, hoa_id: str) -> tuple[bool, Optional[float]]:
        stmt = select(HOAProfileModel.overall_score).where(
            HOAProfileModel.id == hoa_id,
        )
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            return False, None
        return True, row[0]

    async def search_by_name(self, term: str, limit: int) -> List[HOASummary]:
        pattern = f"%{escape_like(term)}%"
        stmt = (
            select(*_SUMMARY_COLUMNS)
            .where(HOAProfileModel.hoa_name.ilike(pattern, escape=LIKE_ESCAPE))
            .order_by(HOAProfileModel.hoa_name.asc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._row_to_summary(row, with_address=False) for row in result]

    async def browse(
        self,
        city: Optional[str],
        zip_code: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[List[HOASummary], int]:
        conditions = []
        if city:
            conditions.append(
                HOAProfileModel.city.ilike(escape_like(city), escape=LIKE_ESCAPE),
            )
        if zip_code:
            conditions.append(HOAProfileModel.zip_code == zip_code)

        count_stmt = (
            select(func.count()).select_from(HOAProfileModel).where(*conditions)
        )
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(*_SUMMARY_COLUMNS)
            .where(*conditions)
            .order_by(HOAProfileModel.hoa_name.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._row_to_summary(row) for row in result], total

    async def find_distinct_cities(self) -> List[str]:
        stmt = (
            select(HOAProfileModel.city)
            .where(HOAProfileModel.city.is_not(None))
            .distinct()
        )
        try:
            result = await self._session.execute(stmt)
        except DBAPIError as e:
            await self._session.rollback()
            raise DistinctCitiesUnavailableError(str(e.orig)) from e
        return [city for city in result.scalars()]

    async def list_city_values(self, limit: int = CITY_SCAN_LIMIT) -> List[str]:
        stmt = (
            select(HOAProfileModel.city)
            .where(HOAProfileModel.city.is_not(None))
            .order_by(HOAProfileModel.city.asc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [city for city in result.scalars()]

    @staticmethod
    def _row_to_summary(row: Any, with_address: bool = True) -> HOASummary:
        return HOASummary(
            id=row.id,
            hoa_name=row.hoa_name,
            city=row.city,
            state=row.state,
            zip_code=row.zip_code,
            management_company=row.management_company,
            address=row.address if with_address else None,
        )

    def _model_to_domain(self, model: HOAProfileModel) -> HOAProfile:
        return HOAProfile(
            id=model.id,
            hoa_name=model.hoa_name,
            city=model.city,
            state=model.state,
            zip_code=model.zip_code,
            address=model.address,
            management_company=model.management_company,
            monthly_fee=model.monthly_fee,
            total_units=model.total_units,
            public_records=PublicRecords.from_dict(model.public_records),
            overall_score=model.overall_score,
            scores=HOAScores(
                financial_health=model.financial_health_score,
                restrictiveness=model.restrictiveness_score,
                management_quality=model.management_quality_score,
                community_sentiment=model.community_sentiment_score,
                legal_risk=_legal_risk(model.ai_analysis),
            ),
            one_sentence_summary=model.one_sentence_summary,
            red_flags=_flags(model.red_flags),
            yellow_flags=_flags(model.yellow_flags),
            green_flags=_flags(model.green_flags),
            questions_to_ask=_strings(model.questions_to_ask),
            documents_to_request=_strings(model.documents_to_request),
            data_completeness=model.data_completeness,
            ai_analysis=model.ai_analysis,
            created_at=ensure_tz_aware(model.created_at),
            last_updated=ensure_tz_aware(model.last_updated),
        )
