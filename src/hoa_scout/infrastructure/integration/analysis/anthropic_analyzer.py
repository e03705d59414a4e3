"""LLM-backed HOA analysis through the Anthropic Messages API."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.services import HOAAnalyzer
from hoa_scout.domain.hoa.value_objects import (
    HOAAnalysis,
    HOAEvidence,
    HOAFlag,
    HOAScores,
    ResearchTopic,
)
from hoa_scout.domain.shared.exceptions import ExternalServiceError
from hoa_scout.infrastructure.integration.analysis.rule_based_analyzer import (
    RuleBasedHOAAnalyzer,
)
from hoa_scout.infrastructure.integration.json_answer import extract_json_object
from hoa_scout_config.settings import Settings

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"

SYSTEM_PROMPT = """You are a real estate analyst specializing in HOA evaluation with 20+ years of experience helping homebuyers make informed decisions.

Your analysis must be honest and direct about problems, specific with examples from the data, actionable with clear next steps, and balanced.

Remember: This is potentially a $300,000+ decision. Be thorough and truthful."""  # NOQA: E501

PROMPT_TEMPLATE = """Analyze this HOA data and provide an evaluation for a potential homebuyer.

HOA INFORMATION:
Name: {name}
Location: {city}, {state} {zip_code}
Monthly Fee: {fee}
Total Units: {units}
Management: {management}

PUBLIC RECORDS DATA:
{records}

COMMUNITY FEEDBACK:
{community}

FINANCIAL DATA:
{financials}

RULES & RESTRICTIONS:
{rules}

Provide your analysis in this EXACT JSON format:

{{
  "overallScore": [0-10 number],
  "oneSentenceSummary": "[One clear sentence summarizing the HOA]",
  "scores": {{
    "financialHealth": [0-10],
    "restrictiveness": [0-10 where 10 = very restrictive],
    "managementQuality": [0-10],
    "communitySentiment": [0-10],
    "legalHistory": [0-10 where 10 = clean history]
  }},
  "redFlags": [{{"title": "...", "description": "...", "severity": "high", "source": "..."}}],
  "yellowFlags": [{{"title": "...", "description": "...", "severity": "moderate", "source": "..."}}],
  "greenFlags": [{{"title": "...", "description": "...", "severity": "positive", "source": "..."}}],
  "questionsToAsk": ["[5 specific questions buyer MUST ask]"],
  "documentsToRequest": ["[Essential documents to review before buying]"],
  "dataQuality": {{"completeness": [0-100], "confidence": "high/moderate/low"}}
}}

CRITICAL: Return ONLY the JSON object. No additional text before or after."""  # NOQA: E501


def _score(value: Any) -> Optional[float]:
    if value is None:
        return None
    score = float(value)
    return max(0.0, min(10.0, score))


def _json(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


def _flags(values: Any) -> tuple[HOAFlag, ...]:
    if not isinstance(values, list):
        return ()
    flags = (HOAFlag.from_dict(value) for value in values)
    return tuple(flag for flag in flags if flag is not None)


def _strings(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(str(value) for value in values if value)


class AnthropicHOAAnalyzer(HOAAnalyzer):
    """
    HOA analyzer that asks Claude for a structured JSON evaluation.

    Any failure (missing key, HTTP error, timeout, malformed answer) falls
    back to the rule-based analyzer, so ``analyze`` only raises for bugs.
    """

    def __init__(  # NOQA: PLR0913
        self,
        api_key: str,
        base_url: str = "https://api.anthropic.com",
        model: str = "claude-3-5-sonnet-latest",
        timeout: float = 60.0,
        fallback: Optional[HOAAnalyzer] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._fallback = fallback or RuleBasedHOAAnalyzer()
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        fallback: Optional[HOAAnalyzer] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> AnthropicHOAAnalyzer:
        return cls(
            api_key=settings.anthropic_api_key.get_secret_value(),
            base_url=settings.anthropic_base_url,
            model=settings.anthropic_model,
            timeout=settings.analysis_timeout_seconds,
            fallback=fallback,
            transport=transport,
        )

    @property
    def model_name(self) -> str:
        return self._model

    async def analyze(
        self,
        profile: HOAProfile,
        evidence: Optional[HOAEvidence] = None,
    ) -> HOAAnalysis:
        if not self._api_key:
            logger.info("Anthropic API key not configured, using rule-based scoring")
            return await self._fallback.analyze(profile, evidence)

        try:
            answer = await self._call_anthropic(self._build_prompt(profile, evidence))
            return self._parse_analysis(answer)
        except httpx.TimeoutException:
            logger.warning("Anthropic request timed out after %.1fs", self._timeout)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Anthropic returned error %d: %s",
                e.response.status_code,
                e.response.text[:200] if e.response.text else "no body",
            )
        except (
            httpx.HTTPError,
            ExternalServiceError,
            ValueError,
            TypeError,
            AttributeError,
            KeyError,
        ) as e:
            logger.warning(
                "AI analysis failed: %s (type: %s)",
                str(e) or repr(e),
                type(e).__name__,
            )
        return await self._fallback.analyze(profile, evidence)

    def _build_prompt(
        self,
        profile: HOAProfile,
        evidence: Optional[HOAEvidence] = None,
    ) -> str:
        fee = profile.monthly_fee
        records = profile.public_records.to_dict()
        evidence = evidence or HOAEvidence()
        if evidence.contact_search is not None:
            records["secondaryContactSearch"] = evidence.contact_search.contact_dict()
        return PROMPT_TEMPLATE.format(
            name=profile.hoa_name,
            city=profile.city or "Unknown",
            state=profile.state or "",
            zip_code=profile.zip_code or "",
            fee=f"${fee}" if fee is not None else "Unknown",
            units=profile.total_units or "Unknown",
            management=profile.management_company or "Self-managed",
            records=_json(records),
            community=_json(evidence.found_data(ResearchTopic.REVIEWS)),
            financials=_json(evidence.found_data(ResearchTopic.FINANCIALS)),
            rules=_json(evidence.found_data(ResearchTopic.RULES)),
        )

    async def _call_anthropic(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "max_tokens": 4000,
            "temperature": 0.7,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }
        timeout = httpx.Timeout(connect=5.0, read=self._timeout, write=10.0, pool=5.0)
        async with httpx.AsyncClient(
            timeout=timeout,
            transport=self._transport,
        ) as client:
            response = await client.post(
                f"{self._base_url}/v1/messages",
                json=payload,
                headers=headers,
            )
            response.raise_for_status()
            data = response.json()

        try:
            return str(data["content"][0]["text"])
        except (KeyError, IndexError, TypeError) as e:
            msg = "Anthropic response has no text content"
            raise ExternalServiceError(msg) from e

    def _parse_analysis(self, answer: str) -> HOAAnalysis:
        data = extract_json_object(answer)
        if not data or not data.get("overallScore") or not data.get("scores"):
            msg = "Invalid analysis format"
            raise ExternalServiceError(msg)

        scores = data["scores"]
        quality = data.get("dataQuality") or {}
        if not isinstance(scores, dict) or not isinstance(quality, dict):
            msg = "Invalid analysis format"
            raise ExternalServiceError(msg)
        completeness = int(quality.get("completeness") or 0)

        return HOAAnalysis(
            overall_score=_score(data["overallScore"]) or 0.0,
            scores=HOAScores(
                financial_health=_score(scores.get("financialHealth")),
                restrictiveness=_score(scores.get("restrictiveness")),
                management_quality=_score(scores.get("managementQuality")),
                community_sentiment=_score(scores.get("communitySentiment")),
                legal_risk=_score(scores.get("legalHistory")),
            ),
            one_sentence_summary=str(data.get("oneSentenceSummary") or ""),
            red_flags=_flags(data.get("redFlags")),
            yellow_flags=_flags(data.get("yellowFlags")),
            green_flags=_flags(data.get("greenFlags")),
            questions_to_ask=_strings(data.get("questionsToAsk")),
            documents_to_request=_strings(data.get("documentsToRequest")),
            data_completeness=max(0, min(100, completeness)),
            analyzer=f"anthropic:{self._model}",
        )
