"""Unit tests for EnrichmentFreshnessPolicy."""

from datetime import datetime, timedelta, timezone

import pytest

from hoa_scout.domain.hoa.value_objects import EnrichmentFreshnessPolicy, PublicRecords

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestEnrichmentFreshnessPolicy:
    """Tests for the 30 day freshness window."""

    def test_recent_enrichment_is_fresh(self):
        records = PublicRecords(enriched=True, enriched_at=NOW - timedelta(days=29))

        assert EnrichmentFreshnessPolicy().is_fresh(NOW, records) is True

    def test_exactly_thirty_days_is_stale(self):
        records = PublicRecords(enriched=True, enriched_at=NOW - timedelta(days=30))

        assert EnrichmentFreshnessPolicy().is_fresh(NOW, records) is False

    def test_not_enriched_is_never_fresh(self):
        records = PublicRecords(enriched=False, enriched_at=NOW)

        assert EnrichmentFreshnessPolicy().is_fresh(NOW, records) is False

    def test_missing_timestamp_is_not_fresh(self):
        records = PublicRecords(enriched=True)

        assert EnrichmentFreshnessPolicy().is_fresh(NOW, records) is False

    def test_naive_timestamps_are_treated_as_utc(self):
        records = PublicRecords(
            enriched=True,
            enriched_at=datetime(2025, 5, 31, 12, 0),
        )

        assert EnrichmentFreshnessPolicy().is_fresh(NOW, records) is True

    def test_custom_window(self):
        policy = EnrichmentFreshnessPolicy.from_days(7)
        records = PublicRecords(enriched=True, enriched_at=NOW - timedelta(days=8))

        assert policy.is_fresh(NOW, records) is False

    def test_window_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            EnrichmentFreshnessPolicy.from_days(0)
