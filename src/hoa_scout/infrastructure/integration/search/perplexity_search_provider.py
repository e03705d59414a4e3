"""Perplexity-based web search for HOA information.

Uses the Perplexity chat completions API (``sonar-pro`` by default) with
Florida-specific prompts that ask for a strict JSON answer. Besides the
contact lookup used for enrichment, the provider answers the financials,
rules and reviews research made before an analysis.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

import httpx

from hoa_scout.domain.hoa.services import HOAResearchProvider, HOASearchProvider
from hoa_scout.domain.hoa.value_objects import (
    HOASearchQuery,
    HOASearchResult,
    ResearchFinding,
    ResearchTopic,
)
from hoa_scout.infrastructure.integration.json_answer import extract_json_object
from hoa_scout.infrastructure.integration.search.research_prompts import (
    RESEARCH_PROMPTS,
)
from hoa_scout.infrastructure.integration.search.retry import (
    RetryPolicy,
    is_retryable,
)
from hoa_scout.infrastructure.integration.search.search_terms import (
    county_from_zip,
    extract_search_terms,
)
from hoa_scout_config.settings import Settings

logger = logging.getLogger(__name__)

API_KEY_MISSING = "API key not configured"
INVALID_ANSWER = "Invalid JSON response"

FLORIDA_MANAGEMENT_COMPANIES = [
    "FirstService Residential",
    "Associa",
    "Sentry Management",
    "Castle Group",
    "Leland Management",
    "Vesta Property Services",
    "KW Property Management",
    "Seacrest Services",
]

SYSTEM_PROMPT = """You are an expert at finding Florida HOA and homeowners association information from public sources.

CRITICAL: Respond with ONLY a valid JSON object, no markdown, no explanations, no code blocks.

Required JSON format:
{
  "subdivisionName": "Name of subdivision/community or null",
  "managementCompany": "Company name or null",
  "phone": "Phone number or null",
  "email": "Email or null",
  "website": "Website URL or null",
  "address": "Mailing address or null",
  "monthlyFee": "Monthly fee amount or null",
  "hoaExists": true or false or null,
  "documentNumber": "Florida corporation document number or null",
  "foundOnline": true or false
}"""  # NOQA: E501

USER_PROMPT_TEMPLATE = """Find HOA information for a property in Florida:

LOCATION:
- City: {city}, FL {zip_code}
- County: {county} County
{street_line}- HOA/Subdivision Name: {primary_term}

SEARCH STRATEGY:
1. Florida SunBiz (sunbiz.org): "{primary_term}" or variations with "Homeowners", "Property Owners", "Association"; document number, status, registered agent
2. Florida DBPR (myfloridalicense.com): community association managers licensed in {city}
3. Major Florida HOA management companies:
{companies}
4. {county} County property appraiser and clerk records
5. HOA/subdivision websites, management company portals, real estate listings

IMPORTANT:
- Return the subdivision/community name even if you can't find other details
- Set hoaExists to false if you confirm there is NO HOA for this area
- Set foundOnline to true only if you found verifiable information"""  # NOQA: E501

Sleep = Callable[[float], Awaitable[None]]


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class PerplexitySearchProvider(HOASearchProvider, HOAResearchProvider):
    """
    HOA search and research provider backed by the Perplexity API.

    Transient failures (timeouts, connection errors, HTTP 429/5xx) are
    retried according to the retry policy; every other failure is turned
    into an unsuccessful ``HOASearchResult``.
    """

    def __init__(  # NOQA: PLR0913
        self,
        api_key: str,
        base_url: str = "https://api.perplexity.ai",
        model: str = "sonar-pro",
        timeout: float = 45.0,
        retry_policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._retry = retry_policy or RetryPolicy()
        self._transport = transport
        self._sleep = sleep
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> PerplexitySearchProvider:
        return cls(
            api_key=settings.perplexity_api_key.get_secret_value(),
            base_url=settings.perplexity_base_url,
            model=settings.perplexity_model,
            timeout=settings.search_timeout_seconds,
            retry_policy=RetryPolicy.from_settings(settings),
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "Perplexity"

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(
                    connect=5.0,
                    read=self._timeout,
                    write=10.0,
                    pool=5.0,
                ),
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search(self, query: HOASearchQuery) -> HOASearchResult:
        if not self._api_key:
            logger.warning("Perplexity API key not configured")
            return HOASearchResult.failure(API_KEY_MISSING)

        started = time.perf_counter()
        county = county_from_zip(query.zip_code)
        terms = extract_search_terms(query.hoa_name, query.city)
        primary_term = terms[0] if terms else query.hoa_name

        logger.info(
            "Searching Perplexity for %r in %s %s (%s County)",
            primary_term,
            query.city,
            query.zip_code,
            county or "Unknown",
        )

        data, error = await self._request(
            self._build_payload(query, primary_term, county),
        )
        if data is None:
            return self._failed(error or INVALID_ANSWER, started)

        elapsed_ms = self._elapsed_ms(started)
        content = self._answer_text(data)
        info = extract_json_object(content)
        if info is None:
            logger.warning("Unparseable Perplexity answer: %s", content[:200])
            return HOASearchResult.failure(INVALID_ANSWER, elapsed_ms)

        citations = data.get("citations") or []
        found_info = any(
            _text(info.get(key))
            for key in (
                "managementCompany",
                "website",
                "phone",
                "subdivisionName",
                "documentNumber",
            )
        )
        hoa_exists = info.get("hoaExists")

        return HOASearchResult(
            success=True,
            found_info=found_info,
            management_company=_text(info.get("managementCompany")),
            phone=_text(info.get("phone")),
            email=_text(info.get("email")),
            website=_text(info.get("website")),
            address=_text(info.get("address")),
            subdivision_name=_text(info.get("subdivisionName")),
            monthly_fee=_text(info.get("monthlyFee")),
            hoa_exists=hoa_exists if isinstance(hoa_exists, bool) else None,
            found_online=info.get("foundOnline") is True,
            document_number=_text(info.get("documentNumber")),
            sources=tuple(str(c) for c in citations),
            search_strategy=primary_term,
            response_time_ms=elapsed_ms,
            county=county,
        )

    async def research(
        self,
        topic: ResearchTopic,
        query: HOASearchQuery,
    ) -> ResearchFinding:
        if not self._api_key:
            return ResearchFinding.failure(topic, API_KEY_MISSING)

        prompt = RESEARCH_PROMPTS[topic]
        started = time.perf_counter()
        logger.info("Researching %s for %r", topic.value, query.hoa_name)

        data, error = await self._request(
            {
                "model": self._model,
                "messages": [
                    {"role": "system", "content": prompt.system},
                    {"role": "user", "content": prompt.build_user_prompt(query)},
                ],
                "return_citations": True,
                "max_tokens": prompt.max_tokens,
                "temperature": 0.1,
            },
        )
        elapsed_ms = self._elapsed_ms(started)
        if data is None:
            error = error or INVALID_ANSWER
            logger.warning("Perplexity %s research failed: %s", topic.value, error)
            return ResearchFinding.failure(topic, error, elapsed_ms)

        content = self._answer_text(data)
        info = extract_json_object(content)
        if info is None:
            logger.warning(
                "Unparseable Perplexity %s answer: %s",
                topic.value,
                content[:200],
            )
            return ResearchFinding.failure(topic, INVALID_ANSWER, elapsed_ms)

        found_info = info.get(prompt.found_key) is True
        logger.info(
            "Perplexity %s research done in %dms (found=%s)",
            topic.value,
            elapsed_ms,
            found_info,
        )
        return ResearchFinding(
            topic=topic,
            success=True,
            found_info=found_info,
            data=info,
            sources=tuple(str(c) for c in data.get("citations") or []),
            response_time_ms=elapsed_ms,
        )

    async def _request(
        self,
        payload: dict[str, Any],
    ) -> tuple[Optional[dict[str, Any]], Optional[str]]:
        """POST a completion; returns the decoded body or an error message."""
        try:
            data = await self._post_with_retry(payload)
        except httpx.HTTPStatusError as e:
            return None, f"Perplexity API error: {e.response.status_code}"
        except httpx.TimeoutException:
            return None, f"Perplexity request timed out after {self._timeout:.0f}s"
        except httpx.HTTPError as e:
            return None, f"Perplexity request failed: {e}"
        except ValueError:
            return None, INVALID_ANSWER

        if not isinstance(data, dict):
            return None, INVALID_ANSWER
        return data, None

    async def _post_with_retry(self, payload: dict[str, Any]) -> dict[str, Any]:
        client = await self._get_client()
        delays = self._retry.delays()

        for attempt in range(self._retry.attempts):
            try:
                response = await client.post("/chat/completions", json=payload)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPError as e:
                if attempt >= len(delays) or not is_retryable(e):
                    raise
                logger.info(
                    "Perplexity attempt %d failed (%s), retrying in %.1fs",
                    attempt + 1,
                    type(e).__name__,
                    delays[attempt],
                )
                await self._sleep(delays[attempt])

        msg = "retry loop exited without a response"
        raise RuntimeError(msg)

    def _build_payload(
        self,
        query: HOASearchQuery,
        primary_term: str,
        county: Optional[str],
    ) -> dict[str, Any]:
        street_line = f"- Street Address: {query.address}\n" if query.address else ""
        user_prompt = USER_PROMPT_TEMPLATE.format(
            city=query.city or "Unknown",
            zip_code=query.zip_code or "",
            county=county or "Unknown",
            street_line=street_line,
            primary_term=primary_term,
            companies="\n".join(f"   - {c}" for c in FLORIDA_MANAGEMENT_COMPANIES),
        )
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            "return_citations": True,
            "max_tokens": 2000,
            "temperature": 0.1,
        }

    @staticmethod
    def _answer_text(data: dict[str, Any]) -> str:
        try:
            return str(data["choices"][0]["message"]["content"] or "")
        except (KeyError, IndexError, TypeError):
            return ""

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.perf_counter() - started) * 1000)

    def _failed(self, error: str, started: float) -> HOASearchResult:
        logger.warning("Perplexity search failed: %s", error)
        return HOASearchResult.failure(error, self._elapsed_ms(started))
