"""Collect web research for an HOA right before it is analyzed."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.services import HOAResearchProvider, HOASearchProvider
from hoa_scout.domain.hoa.value_objects import (
    HOAEvidence,
    HOASearchQuery,
    HOASearchResult,
    ResearchTopic,
)
from hoa_scout.domain.shared.text import is_blank

logger = logging.getLogger(__name__)


class HOAEvidenceGatherer:
    """
    Run the lookups that feed an analysis.

    The financials, rules and reviews research always runs. A second contact
    search runs only when the stored public records hold no phone, email or
    website. All lookups run concurrently; providers report failures in
    their results, so a failed lookup only leaves its part of the evidence
    empty.
    """

    def __init__(
        self,
        search_provider: HOASearchProvider,
        research_provider: HOAResearchProvider,
    ):
        self._search = search_provider
        self._research = research_provider

    async def gather(self, profile: HOAProfile) -> HOAEvidence:
        query = self._query(profile)
        topics = tuple(ResearchTopic)

        lookups = [self._research.research(topic, query) for topic in topics]
        needs_contact = not _has_stored_contact(profile)
        if needs_contact:
            logger.info(
                "No stored contact info for HOA %s, running a second search",
                profile.id,
            )
            lookups.append(self._search.search(query))

        results = await asyncio.gather(*lookups)
        findings = tuple(results[: len(topics)])
        contact_search: Optional[HOASearchResult] = (
            results[-1] if needs_contact else None
        )

        logger.info(
            "Evidence for HOA %s: %s",
            profile.id,
            ", ".join(
                f"{f.topic.value}={'found' if f.found_info else 'none'}"
                for f in findings
            ),
        )
        return HOAEvidence(contact_search=contact_search, findings=findings)

    @staticmethod
    def _query(profile: HOAProfile) -> HOASearchQuery:
        records = profile.public_records
        # Prefer the company found by enrichment over the stored column
        candidates = (
            records.management_company.name if records.management_company else None,
            profile.management_company,
        )
        management_company = next(
            (name for name in candidates if not is_blank(name)),
            None,
        )
        return HOASearchQuery(
            hoa_name=profile.hoa_name,
            city=profile.city,
            state=profile.state,
            zip_code=profile.zip_code,
            address=profile.address,
            management_company=management_company,
            subdivision_name=records.subdivision_name,
        )


def _has_stored_contact(profile: HOAProfile) -> bool:
    contact = profile.public_records.contact_info
    if contact is None:
        return False
    return bool(contact.phone or contact.email or contact.website)
