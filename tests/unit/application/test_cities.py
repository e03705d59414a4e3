"""Unit tests for the cities cache and ListCitiesQuery."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from hoa_scout.application.queries import ListCitiesQuery, normalize_cities
from hoa_scout.application.services import CitiesCache
from hoa_scout.domain.hoa.exceptions import DistinctCitiesUnavailableError

START = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class TestNormalizeCities:
    """Tests for normalize_cities."""

    def test_drops_blank_and_duplicate_values(self):
        result = normalize_cities(["Miami", None, "", "  ", "Miami", " Tampa "])

        assert result == ["Miami", "Tampa"]

    def test_sorts_case_and_accent_insensitively(self):
        result = normalize_cities(["orlando", "Boca Raton", "Ávila", "Naples"])

        assert result == ["Ávila", "Boca Raton", "Naples", "orlando"]


class TestCitiesCache:
    """Tests for CitiesCache."""

    @pytest.mark.asyncio
    async def test_second_call_within_ttl_is_cached(self):
        clock = FakeClock()
        cache = CitiesCache(ttl=timedelta(hours=1), clock=clock)
        loader = AsyncMock(return_value=["Miami", "Tampa"])

        first = await cache.get(loader)
        clock.advance(timedelta(minutes=59))
        second = await cache.get(loader)

        assert first.cached is False
        assert second.cached is True
        assert first.cities == second.cities
        assert loader.await_count == 1

    @pytest.mark.asyncio
    async def test_recomputes_after_expiry(self):
        clock = FakeClock()
        cache = CitiesCache(ttl=timedelta(hours=1), clock=clock)
        loader = AsyncMock(side_effect=[["Miami"], ["Miami", "Tampa"]])

        await cache.get(loader)
        clock.advance(timedelta(hours=1))
        result = await cache.get(loader)

        assert result.cached is False
        assert result.cities == ("Miami", "Tampa")
        assert result.count == 2

    @pytest.mark.asyncio
    async def test_invalidate_forces_reload(self):
        cache = CitiesCache(clock=FakeClock())
        loader = AsyncMock(return_value=["Miami"])

        await cache.get(loader)
        cache.invalidate()
        result = await cache.get(loader)

        assert result.cached is False
        assert loader.await_count == 2

    @pytest.mark.asyncio
    async def test_loader_error_leaves_slot_empty(self):
        cache = CitiesCache(clock=FakeClock())
        failing = AsyncMock(side_effect=RuntimeError("db down"))

        with pytest.raises(RuntimeError):
            await cache.get(failing)

        result = await cache.get(AsyncMock(return_value=["Miami"]))
        assert result.cached is False


class TestListCitiesQuery:
    """Tests for ListCitiesQuery."""

    @pytest.mark.asyncio
    async def test_uses_distinct_lookup(self):
        repo = AsyncMock()
        repo.find_distinct_cities.return_value = ["Tampa", "miami", "Miami"]
        query = ListCitiesQuery(repo, CitiesCache(clock=FakeClock()))

        result = await query.execute()

        assert result.cities == ("Miami", "miami", "Tampa")
        repo.list_city_values.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_row_scan(self):
        repo = AsyncMock()
        repo.find_distinct_cities.side_effect = DistinctCitiesUnavailableError(
            "no DISTINCT support"
        )
        repo.list_city_values.return_value = ["Tampa", "Miami", "Tampa", None]
        query = ListCitiesQuery(repo, CitiesCache(clock=FakeClock()))

        result = await query.execute()

        assert result.cities == ("Miami", "Tampa")
        repo.list_city_values.assert_awaited_once_with(limit=50000)

    @pytest.mark.asyncio
    async def test_both_paths_produce_the_same_list(self):
        values = ["Tampa", " Miami", "Miami", "", "Naples"]
        distinct_repo = AsyncMock()
        distinct_repo.find_distinct_cities.return_value = values
        scan_repo = AsyncMock()
        scan_repo.find_distinct_cities.side_effect = DistinctCitiesUnavailableError(
            "missing"
        )
        scan_repo.list_city_values.return_value = values

        distinct = await ListCitiesQuery(distinct_repo, CitiesCache()).load()
        scanned = await ListCitiesQuery(scan_repo, CitiesCache()).load()

        assert distinct == scanned == ["Miami", "Naples", "Tampa"]
