"""Prompts for the financials, rules and reviews research lookups."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from hoa_scout.domain.hoa.value_objects import HOASearchQuery, ResearchTopic

FINANCIALS_SYSTEM_PROMPT = """You are an expert at finding HOA financial information from public sources.

CRITICAL: Respond with ONLY valid JSON, no markdown, no code blocks.

Required JSON format:
{
  "foundFinancials": true or false,
  "monthlyFee": "Amount as string or null",
  "quarterlyFee": "Amount if quarterly billing or null",
  "annualFee": "Amount if annual billing or null",
  "specialAssessments": [
    {"year": 2024, "amount": "$500", "reason": "Roof replacement"}
  ],
  "reserveFundPercent": number or null,
  "lastReserveStudy": "YYYY or null",
  "feeHistory": [
    {"year": 2024, "amount": "$350"},
    {"year": 2023, "amount": "$325"}
  ],
  "financialHealth": "healthy" or "concerning" or "unknown",
  "lawsuits": [{"year": 2023, "description": "Brief description"}],
  "delinquencyRate": number or null
}"""  # NOQA: E501

FINANCIALS_USER_PROMPT = """Search for financial information about:

HOA: "{hoa_name}"
{management_line}Location: {city}, FL {zip_code}

Look for:
1. Monthly/quarterly/annual assessment amounts
2. Recent special assessments and reasons
3. Reserve fund status (% funded, last study)
4. Fee increase history over past 5 years
5. Any lawsuits, liens, or financial disputes
6. Delinquency rates if mentioned

Search real estate listings, HOA disclosure documents, news articles, and management company info.
Only include information you can verify from sources."""  # NOQA: E501

RULES_SYSTEM_PROMPT = """You are an expert at finding HOA rules and restrictions from public sources.

CRITICAL: Respond with ONLY valid JSON, no markdown, no code blocks.

Required JSON format:
{
  "foundRules": true or false,
  "rentalRestrictions": {
    "shortTermAllowed": true or false or null,
    "minLeaseTerm": "6 months" or null,
    "rentalCapPercent": number or null,
    "ownerOccupiedRequired": number or null
  },
  "petRestrictions": {
    "allowed": true or false or null,
    "maxNumber": number or null,
    "weightLimit": "50 lbs" or null,
    "breedRestrictions": ["breed1"] or null
  },
  "parkingRules": {
    "guestParking": "description or null",
    "rvBoatAllowed": true or false or null,
    "garageRequired": true or false or null
  },
  "exteriorModifications": {
    "approvalRequired": true or false or null,
    "commonRestrictions": ["fence colors", "landscaping"]
  },
  "notableRules": ["Any unusual or strict rules"],
  "recentRuleChanges": ["Recent amendments if any"],
  "ccrsAvailableOnline": true or false
}"""  # NOQA: E501

RULES_USER_PROMPT = """Search for rules and restrictions for:

HOA/Subdivision: "{search_name}"
Location: {city}, FL

Find information about:
1. Rental restrictions (short-term/Airbnb, minimum lease terms, rental caps)
2. Pet policies (size limits, breed restrictions, number allowed)
3. Parking rules (guest parking, RV/boat storage, garage requirements)
4. Exterior modification rules (fencing, landscaping, paint colors)
5. Any unusual or notably strict rules
6. Recent rule changes or amendments

Also check:
- If CC&Rs are publicly available online
- Florida-specific HOA regulations that apply
- Any news about rule disputes or enforcement issues

Only include rules you can verify from actual sources."""  # NOQA: E501

REVIEWS_SYSTEM_PROMPT = """You are an expert at finding HOA reviews and community feedback from public sources.

CRITICAL: Respond with ONLY valid JSON, no markdown, no code blocks.

Required JSON format:
{
  "overallSentiment": "positive" or "negative" or "mixed" or "unknown",
  "reviewCount": number,
  "averageRating": number (1-5) or null,
  "commonComplaints": ["complaint 1", "complaint 2"],
  "commonPraise": ["positive 1", "positive 2"],
  "redditMentions": number,
  "googleReviewRating": number or null,
  "bbbRating": "A+" or "A" or "B" etc or null,
  "bbbComplaints": number or null,
  "newsArticles": [{"title": "Title", "summary": "Brief summary", "year": 2024}],
  "neighborhoodApps": {"nextdoor": true/false, "sentiment": "positive/negative/mixed"},
  "foundOnline": true or false
}"""  # NOQA: E501

REVIEWS_USER_PROMPT = """Search for reviews and community feedback about {search_target} in {city}, Florida.

SEARCH THESE SOURCES:
1. Google reviews of the management company
2. BBB (Better Business Bureau) - complaints count and rating
3. Reddit - r/florida, r/HOA, r/{city_slug} if exists
4. Yelp reviews of management company
5. HOA forums - HOAForum.com, BiggerPockets
6. NextDoor and neighborhood apps (note if community is active)
7. Local Florida news articles about HOA disputes
8. Florida CAM complaints (DBPR)

For management company "{management_company}", also check:
- Google Business reviews
- Facebook page reviews
- Any lawsuits or regulatory actions

Summarize:
- Overall sentiment (positive/negative/mixed)
- Most common complaints (top 3-5)
- Most common praise (top 3-5)
- Any notable news or incidents

Set foundOnline to true only if you found actual reviews or mentions."""  # NOQA: E501


def financials_prompt(query: HOASearchQuery) -> str:
    management_line = (
        f"Management Company: {query.management_company}\n"
        if query.management_company
        else ""
    )
    return FINANCIALS_USER_PROMPT.format(
        hoa_name=query.hoa_name,
        management_line=management_line,
        city=query.city or "Unknown",
        zip_code=query.zip_code or "",
    )


def rules_prompt(query: HOASearchQuery) -> str:
    return RULES_USER_PROMPT.format(
        search_name=query.subdivision_name or query.hoa_name,
        city=query.city or "Unknown",
    )


def reviews_prompt(query: HOASearchQuery) -> str:
    if query.management_company:
        search_target = (
            f'"{query.hoa_name}" HOA or "{query.management_company}" '
            "management company"
        )
    else:
        search_target = f'"{query.hoa_name}" HOA'
    city = query.city or "Unknown"
    return REVIEWS_USER_PROMPT.format(
        search_target=search_target,
        city=city,
        city_slug=re.sub(r"\s", "", city.lower()),
        management_company=query.management_company or "unknown",
    )


@dataclass(frozen=True)
class ResearchPrompt:
    """System prompt, user prompt builder and answer flag for one topic."""

    system: str
    build_user_prompt: Callable[[HOASearchQuery], str]
    max_tokens: int
    # Answer key that is true when the provider found verifiable data
    found_key: str


RESEARCH_PROMPTS: dict[ResearchTopic, ResearchPrompt] = {
    ResearchTopic.FINANCIALS: ResearchPrompt(
        system=FINANCIALS_SYSTEM_PROMPT,
        build_user_prompt=financials_prompt,
        max_tokens=1500,
        found_key="foundFinancials",
    ),
    ResearchTopic.RULES: ResearchPrompt(
        system=RULES_SYSTEM_PROMPT,
        build_user_prompt=rules_prompt,
        max_tokens=1500,
        found_key="foundRules",
    ),
    ResearchTopic.REVIEWS: ResearchPrompt(
        system=REVIEWS_SYSTEM_PROMPT,
        build_user_prompt=reviews_prompt,
        max_tokens=2000,
        found_key="foundOnline",
    ),
}
