"""Unit tests for the shared clock helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from hoa_scout.domain.shared.time import ensure_tz_aware, parse_iso_datetime


class TestParseIsoDatetime:
    """Tests for reading timestamps out of stored JSON."""

    def test_zulu_suffix_is_utc(self):
        assert parse_iso_datetime("2024-03-01T12:00:00Z") == datetime(
            2024, 3, 1, 12, tzinfo=timezone.utc
        )

    def test_offset_is_kept(self):
        parsed = parse_iso_datetime("2024-03-01T12:00:00+02:00")

        assert parsed.utcoffset() == timedelta(hours=2)

    def test_naive_value_is_treated_as_utc(self):
        assert parse_iso_datetime("2024-03-01T12:00:00").tzinfo is timezone.utc

    def test_datetime_passes_through(self):
        moment = datetime(2024, 3, 1)

        assert parse_iso_datetime(moment) == moment.replace(tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "yesterday", 1709294400, 17.5, ["2024-03-01"], {"at": 1}],
    )
    def test_unusable_values_give_none(self, value):
        assert parse_iso_datetime(value) is None


def test_ensure_tz_aware_keeps_aware_datetimes():
    moment = datetime(2024, 3, 1, tzinfo=timezone(timedelta(hours=-5)))

    assert ensure_tz_aware(moment) is moment
