"""Merge rules for applying a search result to stored enrichment data."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from hoa_scout.domain.hoa.value_objects import (
    Confidence,
    ContactInfo,
    HOASearchResult,
    ManagementCompanyInfo,
    ProviderResponse,
    PublicRecords,
)
from hoa_scout.domain.shared.text import is_blank

SOURCE_WEB_SEARCH = "Perplexity Web Search"
SOURCE_LIMITED = "Limited Data Available"
SOURCE_FAILED = "Perplexity Search (Failed)"

COMPANY_SOURCE_WEB = "web_search"
COMPANY_SOURCE_STORED = "sunbiz"

# Leading amount with optional "$" and thousands separators.
_FEE_PATTERN = re.compile(r"^\s*\$?\s*(\d+(?:,\d{3})*(?:\.\d+)?)")


def parse_monthly_fee(value: Optional[str]) -> Optional[Decimal]:
    """Parse the leading amount of a currency-formatted string.

    ``"$150/month"`` gives 150, ``"$1,250.50"`` gives 1250.50. Anything
    without a leading number gives None.
    """
    if not value:
        return None
    match = _FEE_PATTERN.match(value)
    if not match:
        return None
    try:
        return Decimal(match.group(1).replace(",", ""))
    except InvalidOperation:
        return None


@dataclass(frozen=True)
class EnrichmentMerge:
    """Outcome of merging a search result into a profile's records."""

    records: PublicRecords
    management_company: Optional[str]
    monthly_fee: Optional[Decimal]


def merge_enrichment(
    existing: PublicRecords,
    result: HOASearchResult,
    stored_management_company: Optional[str],
    stored_monthly_fee: Optional[Decimal],
    now: datetime,
) -> EnrichmentMerge:
    """Merge a successful search result into existing enrichment data.

    Verification, confidence, source, contact, subdivision and the provider
    response always come from ``result``. The management company and monthly
    fee columns are only filled when nothing is stored yet.
    """
    found = result.found_info
    company_name = result.management_company or stored_management_company

    records = replace(
        existing,
        enriched=True,
        enriched_at=now,
        source=SOURCE_WEB_SEARCH if found else SOURCE_LIMITED,
        confidence=Confidence.MEDIUM if found else Confidence.LOW,
        error=None,
        management_company=ManagementCompanyInfo(
            name=company_name,
            verified=bool(result.management_company),
            source=(
                COMPANY_SOURCE_WEB
                if result.management_company
                else COMPANY_SOURCE_STORED
            ),
        ),
        contact_info=ContactInfo(
            phone=result.phone,
            email=result.email,
            website=result.website,
            address=result.address,
            verified=found,
        ),
        subdivision_name=result.subdivision_name,
        monthly_fee_estimate=result.monthly_fee,
        hoa_exists=result.hoa_exists,
        provider_response=ProviderResponse(
            found_info=found,
            found_online=result.found_online,
            sources=result.sources,
            search_strategy=result.search_strategy,
            response_time_ms=result.response_time_ms,
        ),
    )

    management_company = None
    if is_blank(stored_management_company) and not is_blank(
        result.management_company,
    ):
        management_company = result.management_company

    monthly_fee = None
    if stored_monthly_fee is None:
        monthly_fee = parse_monthly_fee(result.monthly_fee)

    return EnrichmentMerge(
        records=records,
        management_company=management_company,
        monthly_fee=monthly_fee,
    )


def mark_enrichment_failed(
    existing: PublicRecords,
    error: str,
    now: datetime,
) -> PublicRecords:
    """Record a failed lookup so the freshness window suppresses retries."""
    return replace(
        existing,
        enriched=True,
        enriched_at=now,
        source=SOURCE_FAILED,
        confidence=Confidence.LOW,
        error=error,
        provider_response=ProviderResponse(found_info=False, error=error),
    )
