"""Unit tests for search-term helpers and JSON answer extraction."""

import pytest

from hoa_scout.infrastructure.integration.json_answer import extract_json_object
from hoa_scout.infrastructure.integration.search.search_terms import (
    county_from_zip,
    extract_search_terms,
)


class TestExtractSearchTerms:
    """Tests for extract_search_terms."""

    def test_plain_name_and_stripped_variant(self):
        terms = extract_search_terms("Palm Grove Homeowners Association Inc", "Miami")

        assert terms == ["Palm Grove Homeowners Association Inc", "Palm Grove"]

    def test_name_without_suffix_is_used_once(self):
        assert extract_search_terms("Palm Grove") == ["Palm Grove"]

    def test_generic_address_name_becomes_street_search(self):
        terms = extract_search_terms("HOA at 123 Sunset Drive", "Tampa")

        assert terms == [
            "Sunset HOA",
            "Sunset Homeowners Association",
            "Sunset Tampa",
        ]

    def test_generic_name_without_city(self):
        terms = extract_search_terms("HOA at 9 Coral Way")

        assert terms[-1] == "Coral"

    def test_generic_name_without_house_number(self):
        assert extract_search_terms("HOA at Sunset Drive", "Tampa") == []


class TestCountyFromZip:
    """Tests for county_from_zip."""

    @pytest.mark.parametrize(
        ("zip_code", "county"),
        [
            ("33101", "Miami-Dade"),
            ("33301", "Broward"),
            ("32801", None),
            ("34201", "Orange"),
            (" 33401 ", "Palm Beach"),
            (None, None),
            ("", None),
        ],
    )
    def test_lookup(self, zip_code, county):
        assert county_from_zip(zip_code) == county


class TestExtractJsonObject:
    """Tests for extract_json_object."""

    def test_raw_object(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_object_with_prose(self):
        text = 'Sure!\n```json\n{"a": {"b": 2}}\n```\nThanks'

        assert extract_json_object(text) == {"a": {"b": 2}}

    def test_object_embedded_in_text(self):
        assert extract_json_object('Result: {"ok": true} done') == {"ok": True}

    @pytest.mark.parametrize("text", ["", "no json here", "[1, 2]", "{broken"])
    def test_returns_none_without_object(self, text):
        assert extract_json_object(text) is None
