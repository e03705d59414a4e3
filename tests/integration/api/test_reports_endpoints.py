"""Integration tests for the report endpoint and its cache."""

import pytest

pytestmark = pytest.mark.integration


class TestReport:
    """Tests for GET /reports/{hoa_id}."""

    def test_unanalyzed_report(self, test_client):
        response = test_client.get("/reports/hoa-palm")

        assert response.status_code == 200
        data = response.json()
        assert data["hoa_name"] == "Palm Grove HOA"
        assert data["monthly_fee_display"] == "$250"
        assert data["total_units_display"] == "120"
        assert data["score"] is None
        assert data["analysis_pending"] is True
        assert data["last_updated_display"] == "Today"
        assert data["enrichment"]["enriched"] is False

    def test_missing_values_display_placeholder(self, test_client):
        data = test_client.get("/reports/hoa-nowhere").json()

        assert data["monthly_fee_display"] == "N/A"
        assert data["total_units_display"] == "N/A"
        assert data["city"] is None

    def test_unknown_hoa(self, test_client):
        response = test_client.get("/reports/missing")

        assert response.status_code == 404
        assert response.json()["code"] == "HOA_NOT_FOUND"

    def test_report_is_cached(self, test_client, report_cache):
        test_client.get("/reports/hoa-palm")

        assert report_cache.get("/reports/hoa-palm") is not None

    def test_analysis_invalidates_cached_report(
        self,
        test_client,
        report_cache,
        analyze_now,
    ):
        test_client.get("/reports/hoa-palm")

        analyze_now("hoa-palm")
        data = test_client.get("/reports/hoa-palm").json()

        assert data["analysis_pending"] is False
        assert data["score"] == {
            "value": 5.9,
            "label": "Fair",
            "color_class": "text-yellow-600",
            "bg_color_class": "bg-yellow-50",
        }
        assert data["scores"]["financial_health"] == 7.0
        assert data["scores"]["legal_risk"] == 8.0
        assert data["data_completeness"] == 40
        assert [f["title"] for f in data["yellow_flags"]] == ["Incomplete Data"]
        assert len(data["questions_to_ask"]) == 5

    def test_enrichment_invalidates_cached_report(self, test_client):
        test_client.get("/reports/hoa-palm")

        test_client.post("/api/hoa/hoa-palm/enrich")
        data = test_client.get("/reports/hoa-palm").json()

        assert data["enrichment"]["enriched"] is True
        assert data["enrichment"]["management_company"]["name"] == (
            "FirstService Residential"
        )

    def test_lawsuits_lower_legal_score(self, analyze_now):
        assert analyze_now("hoa-coral") == 4.8
