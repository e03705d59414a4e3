"""Integration tests for HOAProfileRepositorySQLAlchemy against SQLite."""

from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import select

from hoa_scout.application.commands import AnalyzeHOACommand
from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.value_objects import Confidence, PublicRecords
from hoa_scout.infrastructure.cache import InMemoryReportCache
from hoa_scout.infrastructure.integration.analysis import RuleBasedHOAAnalyzer
from hoa_scout.infrastructure.persistence.sqlalchemy.models import HOAProfileModel
from hoa_scout.infrastructure.persistence.sqlalchemy.repositories import (
    HOAProfileRepositorySQLAlchemy,
    SQLAlchemyRepositoryFactory,
    escape_like,
)

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def session(db_session_maker):
    async with db_session_maker() as session:
        yield session


@pytest.fixture
def repo(session):
    return HOAProfileRepositorySQLAlchemy(session)


class TestFindAndSave:
    """Tests for loading and storing profiles."""

    @pytest.mark.asyncio
    async def test_find_seeded_profile(self, repo):
        profile = await repo.find_by_id("hoa-palm")

        assert profile is not None
        assert profile.hoa_name == "Palm Grove HOA"
        assert profile.monthly_fee == Decimal("250")
        assert profile.total_units == 120
        assert profile.overall_score is None
        assert profile.last_updated.tzinfo is not None

    @pytest.mark.asyncio
    async def test_find_unknown_returns_none(self, repo):
        assert await repo.find_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_legacy_keys_are_rewritten_in_snake_case(self, repo, session):
        profile = await repo.find_by_id("hoa-coral")
        assert profile.public_records.enriched_at is not None
        assert profile.public_records.extra["lawsuits"] == [{"case": "2019-CA-42"}]

        await repo.save(profile)
        await session.commit()

        stored = await session.scalar(
            select(HOAProfileModel.public_records).where(
                HOAProfileModel.id == "hoa-coral",
            )
        )
        assert "enriched_at" in stored
        assert "enrichedAt" not in stored
        assert stored["lawsuits"] == [{"case": "2019-CA-42"}]

    @pytest.mark.asyncio
    async def test_save_updates_existing_row(self, repo, session, db_session_maker):
        profile = await repo.find_by_id("hoa-bay")
        profile.apply_enrichment(
            PublicRecords(enriched=True, confidence=Confidence.MEDIUM),
            management_company="Associa",
        )
        await repo.save(profile)
        await session.commit()

        async with db_session_maker() as other:
            reloaded = await HOAProfileRepositorySQLAlchemy(other).find_by_id("hoa-bay")

        assert reloaded.management_company == "Associa"
        assert reloaded.public_records.confidence is Confidence.MEDIUM

    @pytest.mark.asyncio
    async def test_save_new_profile(self, repo, session):
        profile = HOAProfile(hoa_name="Fresh Start HOA", city="Orlando", state="FL")

        await repo.save(profile)
        await session.commit()

        assert (await repo.find_by_id(profile.id)).city == "Orlando"


class TestSearchByName:
    """Tests for the name search."""

    @pytest.mark.asyncio
    async def test_case_insensitive_substring(self, repo):
        results = await repo.search_by_name("GROVE", 10)

        assert [r.id for r in results] == ["hoa-palm"]
        assert results[0].address is None

    @pytest.mark.asyncio
    async def test_ordered_by_name_and_limited(self, repo):
        results = await repo.search_by_name("o", 3)

        assert [r.hoa_name for r in results] == [
            "Bayview 100% Owners",
            "Coral_Reef Estates",
            "Oak Hollow Homeowners Association",
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("term", "expected"),
        [("%", ["hoa-bay"]), ("_", ["hoa-coral"]), ("0%", ["hoa-bay"])],
    )
    async def test_wildcards_match_literally(self, repo, term, expected):
        results = await repo.search_by_name(term, 10)

        assert [r.id for r in results] == expected

    def test_escape_like(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


class TestBrowse:
    """Tests for location browsing."""

    @pytest.mark.asyncio
    async def test_city_is_case_insensitive(self, repo):
        results, total = await repo.browse(
            city="MIAMI",
            zip_code=None,
            offset=0,
            limit=20,
        )

        assert total == 2
        assert [r.id for r in results] == ["hoa-bay", "hoa-palm"]
        assert results[1].address == "1 Palm Way"

    @pytest.mark.asyncio
    async def test_city_and_zip_combine(self, repo):
        results, total = await repo.browse(
            city="miami",
            zip_code="33139",
            offset=0,
            limit=20,
        )

        assert total == 1
        assert results[0].id == "hoa-bay"

    @pytest.mark.asyncio
    async def test_offset_pages_through_results(self, repo):
        results, total = await repo.browse(
            city="Miami",
            zip_code=None,
            offset=1,
            limit=1,
        )

        assert total == 2
        assert [r.id for r in results] == ["hoa-palm"]

    @pytest.mark.asyncio
    async def test_city_wildcards_are_literal(self, repo):
        results, total = await repo.browse(
            city="Mia%",
            zip_code=None,
            offset=0,
            limit=20,
        )

        assert total == 0
        assert results == []


class TestCities:
    """Tests for the city lookups."""

    @pytest.mark.asyncio
    async def test_distinct_cities_skip_null(self, repo):
        cities = await repo.find_distinct_cities()

        assert sorted(cities) == ["Miami", "Naples", "Tampa", "miami"]

    @pytest.mark.asyncio
    async def test_city_scan_respects_limit(self, repo):
        assert len(await repo.list_city_values(limit=2)) == 2
        assert len(await repo.list_city_values()) == 4


class TestOverallScore:
    """Tests for the analysis status lookup."""

    @pytest.mark.asyncio
    async def test_unknown_hoa(self, repo):
        assert await repo.get_overall_score("missing") == (False, None)

    @pytest.mark.asyncio
    async def test_unanalyzed_hoa(self, repo):
        assert await repo.get_overall_score("hoa-palm") == (True, None)

    @pytest.mark.asyncio
    async def test_score_after_rule_based_analysis(self, repo, session):
        command = AnalyzeHOACommand.from_factory(
            SQLAlchemyRepositoryFactory(session),
            analyzer=RuleBasedHOAAnalyzer(),
            report_cache=InMemoryReportCache(),
        )

        result = await command.execute("hoa-palm")

        assert result.overall_score == 5.9
        assert await repo.get_overall_score("hoa-palm") == (True, 5.9)

        profile = await repo.find_by_id("hoa-palm")
        assert profile.scores.financial_health == 7
        assert profile.scores.legal_risk == 8
        assert profile.ai_analysis["analyzer"] == "rule_based"
        assert len(profile.questions_to_ask) == 5
