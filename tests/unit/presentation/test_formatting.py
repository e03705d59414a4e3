"""Unit tests for display formatting helpers."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from hoa_scout.domain.shared.exceptions import ValidationError
from hoa_scout.presentation.formatting import (
    ParsedAddress,
    calculate_percentage,
    format_currency,
    format_date,
    format_number,
    get_error_message,
    get_initials,
    is_valid_email,
    parse_address,
    score_bg_color,
    score_color,
    score_label,
    truncate,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


class TestFormatCurrency:
    """Tests for format_currency."""

    @pytest.mark.parametrize(
        ("amount", "show_cents", "expected"),
        [
            (1250, False, "$1,250"),
            (1250.5, True, "$1,250.50"),
            (Decimal("249.5"), False, "$250"),
            (0, False, "$0"),
            (-75, False, "-$75"),
            (1234567.891, True, "$1,234,567.89"),
            (None, False, "N/A"),
        ],
    )
    def test_formats(self, amount, show_cents, expected):
        assert format_currency(amount, show_cents=show_cents) == expected


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1234, "1,234"),
            (1234.5, "1,234.5"),
            (0.12345, "0.123"),
            (0, "0"),
            (None, "N/A"),
        ],
    )
    def test_formats(self, value, expected):
        assert format_number(value) == expected


class TestFormatDate:
    """Tests for format_date."""

    def test_short_and_long(self):
        moment = datetime(2025, 1, 5, 9, 30, tzinfo=timezone.utc)

        assert format_date(moment) == "Jan 5, 2025"
        assert format_date(moment, "long") == "Sunday, January 5, 2025"

    def test_accepts_iso_string_and_date(self):
        assert format_date("2025-01-05T09:30:00Z") == "Jan 5, 2025"
        assert format_date(date(2025, 1, 5)) == "Jan 5, 2025"

    def test_unknown_format_is_iso(self):
        moment = datetime(2025, 1, 5, tzinfo=timezone.utc)

        assert format_date(moment, "iso") == "2025-01-05T00:00:00+00:00"

    @pytest.mark.parametrize("value", [None, "", "not a date"])
    def test_missing_or_invalid(self, value):
        assert format_date(value) == "N/A"

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(0), "Today"),
            (timedelta(hours=20), "Today"),
            (timedelta(hours=30), "Yesterday"),
            (timedelta(days=3), "3 days ago"),
            (timedelta(days=14), "2 weeks ago"),
            (timedelta(days=65), "2 months ago"),
            (timedelta(days=800), "2 years ago"),
        ],
    )
    def test_relative(self, delta, expected):
        assert format_date(NOW - delta, "relative", now=NOW) == expected


class TestScoreBands:
    """Tests for score colour and label bands."""

    @pytest.mark.parametrize(
        ("score", "color", "background", "label"),
        [
            (9.0, "text-green-600", "bg-green-100", "Excellent"),
            (8.5, "text-green-600", "bg-green-100", "Excellent"),
            (7.0, "text-green-500", "bg-green-50", "Good"),
            (6.0, "text-yellow-600", "bg-yellow-50", "Fair"),
            (4.0, "text-orange-600", "bg-orange-50", "Poor"),
            (3.9, "text-red-600", "bg-red-50", "Critical"),
        ],
    )
    def test_band(self, score, color, background, label):
        assert score_color(score) == color
        assert score_bg_color(score) == background
        assert score_label(score) == label


class TestTextHelpers:
    """Tests for the small text helpers."""

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("a" * 12, 10) == "a" * 10 + "..."
        assert truncate(None) == ""

    def test_parse_address_with_state_and_zip(self):
        assert parse_address("12 Palm Ct, Miami, FL 33101") == ParsedAddress(
            street="12 Palm Ct",
            city="Miami",
            state="FL",
            zip_code="33101",
        )

    def test_parse_address_positional_fallback(self):
        parsed = parse_address("12 Palm Ct, Miami, Florida")

        assert parsed == ParsedAddress("12 Palm Ct", "Miami", "Florida", "")

    def test_parse_address_too_short(self):
        assert parse_address("12 Palm Ct, Miami") is None

    def test_calculate_percentage(self):
        assert calculate_percentage(1, 3) == 33
        assert calculate_percentage(1, 8) == 13
        assert calculate_percentage(5, 0) == 0

    @pytest.mark.parametrize(
        ("name", "initials"),
        [("Jane Q Public", "JP"), ("cher", "C"), ("", ""), (None, "")],
    )
    def test_get_initials(self, name, initials):
        assert get_initials(name) == initials

    @pytest.mark.parametrize(
        ("email", "valid"),
        [("a@b.co", True), ("no-at.example", False), ("a b@c.d", False), (None, False)],
    )
    def test_is_valid_email(self, email, valid):
        assert is_valid_email(email) is valid


class TestGetErrorMessage:
    """Tests for get_error_message."""

    def test_string(self):
        assert get_error_message("boom") == "boom"

    def test_dict(self):
        assert get_error_message({"message": "bad"}) == "bad"
        assert get_error_message({"error": "worse"}) == "worse"
        assert get_error_message({}) == "An unexpected error occurred"

    def test_domain_exception_message(self):
        assert get_error_message(ValidationError("HOA ID required")) == "HOA ID required"

    def test_plain_exception(self):
        assert get_error_message(RuntimeError("db down")) == "db down"
        assert get_error_message(RuntimeError()) == "An unexpected error occurred"

    def test_unknown(self):
        assert get_error_message(42) == "An unexpected error occurred"
