"""Unit tests for the research evidence value objects."""

from hoa_scout.domain.hoa.value_objects import (
    HOAEvidence,
    HOASearchResult,
    ResearchFinding,
    ResearchTopic,
)


def _financials(found_info=True, **data) -> ResearchFinding:
    return ResearchFinding(
        topic=ResearchTopic.FINANCIALS,
        success=True,
        found_info=found_info,
        data=data,
        sources=("https://news.example",),
        response_time_ms=800,
    )


class TestHOAEvidence:
    """Tests for HOAEvidence."""

    def test_lawsuits_come_from_verified_financials(self):
        lawsuits = [{"year": 2022, "description": "Lien dispute"}]

        verified = HOAEvidence(findings=(_financials(lawsuits=lawsuits),))
        assert verified.lawsuits == lawsuits
        unverified = HOAEvidence(
            findings=(_financials(found_info=False, lawsuits=lawsuits),),
        )
        assert unverified.lawsuits == []

    def test_non_list_lawsuits_are_ignored(self):
        evidence = HOAEvidence(findings=(_financials(lawsuits="none known"),))

        assert evidence.lawsuits == []

    def test_missing_topic(self):
        evidence = HOAEvidence()

        assert evidence.finding(ResearchTopic.REVIEWS) is None
        assert evidence.found_data(ResearchTopic.REVIEWS) == {}
        assert evidence.to_dict() == {}

    def test_to_dict(self):
        evidence = HOAEvidence(
            contact_search=HOASearchResult.failure("Perplexity API error: 500"),
            findings=(
                _financials(monthlyFee="$300"),
                ResearchFinding.failure(ResearchTopic.RULES, "timed out", 45000),
            ),
        )

        assert evidence.to_dict() == {
            "financials": {
                "success": True,
                "found_info": True,
                "data": {"monthlyFee": "$300"},
                "sources": ["https://news.example"],
                "response_time_ms": 800,
            },
            "rules": {
                "success": False,
                "found_info": False,
                "data": {},
                "sources": [],
                "response_time_ms": 45000,
                "error": "timed out",
            },
            "contact_search": {
                "success": False,
                "found_info": False,
                "phone": None,
                "email": None,
                "website": None,
                "address": None,
                "sources": [],
                "response_time_ms": None,
                "error": "Perplexity API error: 500",
            },
        }
