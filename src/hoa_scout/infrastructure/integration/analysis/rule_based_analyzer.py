"""Rule-based HOA scoring used when no LLM analysis is available."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.services import HOAAnalyzer
from hoa_scout.domain.hoa.value_objects import (
    HOAAnalysis,
    HOAEvidence,
    HOAFlag,
    HOAScores,
)

logger = logging.getLogger(__name__)

# Weights of the overall score; restrictiveness counts inverted.
FINANCIAL_WEIGHT = 0.3
RESTRICTIVENESS_WEIGHT = 0.15
MANAGEMENT_WEIGHT = 0.25
COMMUNITY_WEIGHT = 0.2
LEGAL_WEIGHT = 0.1

FALLBACK_SUMMARY = "Limited data available for comprehensive HOA analysis."
FALLBACK_COMPLETENESS = 25

STANDARD_QUESTIONS = (
    "Can you provide complete financial statements?",
    "What is the current reserve fund status?",
    "Are there any pending or planned special assessments?",
    "Can I review the CC&Rs and bylaws?",
    "What is the process for architectural modifications?",
)

STANDARD_DOCUMENTS = (
    "CC&Rs (Covenants, Conditions & Restrictions)",
    "Current bylaws",
    "Last 2 years of financial statements",
    "Reserve study",
    "Board meeting minutes (last 6 months)",
)

INCOMPLETE_DATA_FLAG = HOAFlag(
    title="Incomplete Data",
    description="Unable to perform full AI analysis. Manual research recommended.",
    severity="moderate",
    source="System",
)


def weighted_overall_score(
    financial_health: float,
    restrictiveness: float,
    management_quality: float,
    community_sentiment: float,
    legal_risk: float,
) -> float:
    """Weighted 0-10 score rounded half-up to one decimal."""
    raw = (
        financial_health * FINANCIAL_WEIGHT
        + (10 - restrictiveness) * RESTRICTIVENESS_WEIGHT
        + management_quality * MANAGEMENT_WEIGHT
        + community_sentiment * COMMUNITY_WEIGHT
        + legal_risk * LEGAL_WEIGHT
    )
    return float(Decimal(str(raw)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def financial_score_for_fee(monthly_fee: Decimal | None) -> float:
    if monthly_fee is None:
        return 5
    if monthly_fee > 500:
        return 4
    if monthly_fee > 300:
        return 6
    return 7


def _has_lawsuits(profile: HOAProfile, evidence: Optional[HOAEvidence]) -> bool:
    stored = profile.public_records.extra.get("lawsuits")
    if isinstance(stored, list) and stored:
        return True
    return evidence is not None and bool(evidence.lawsuits)


class RuleBasedHOAAnalyzer(HOAAnalyzer):
    """Deterministic scoring from the monthly fee and known lawsuits.

    Lawsuits count when stored with the public records or reported by the
    financials research of this run.
    """

    async def analyze(
        self,
        profile: HOAProfile,
        evidence: Optional[HOAEvidence] = None,
    ) -> HOAAnalysis:
        financial = financial_score_for_fee(profile.monthly_fee)
        restrictiveness = 5
        management = 5
        community = 5
        legal = 3 if _has_lawsuits(profile, evidence) else 8

        overall = weighted_overall_score(
            financial,
            restrictiveness,
            management,
            community,
            legal,
        )
        logger.debug("Rule-based score for HOA %s: %.1f", profile.id, overall)

        return HOAAnalysis(
            overall_score=overall,
            scores=HOAScores(
                financial_health=financial,
                restrictiveness=restrictiveness,
                management_quality=management,
                community_sentiment=community,
                legal_risk=legal,
            ),
            one_sentence_summary=FALLBACK_SUMMARY,
            yellow_flags=(INCOMPLETE_DATA_FLAG,),
            questions_to_ask=STANDARD_QUESTIONS,
            documents_to_request=STANDARD_DOCUMENTS,
            data_completeness=FALLBACK_COMPLETENESS,
            analyzer="rule_based",
        )
