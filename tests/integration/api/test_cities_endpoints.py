"""Integration tests for the cities and health endpoints."""

import pytest

from hoa_scout import __version__

pytestmark = pytest.mark.integration


class TestHealth:
    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}


class TestListCities:
    """Tests for GET /api/cities."""

    def test_lists_sorted_distinct_cities(self, test_client):
        response = test_client.get("/api/cities")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["cities"] == ["Miami", "miami", "Naples", "Tampa"]
        assert data["count"] == 4
        assert data["cached"] is False

    def test_second_call_is_cached(self, test_client):
        first = test_client.get("/api/cities").json()
        second = test_client.get("/api/cities").json()

        assert second["cached"] is True
        assert second["cities"] == first["cities"]
