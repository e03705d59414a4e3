"""Extra web research gathered right before an HOA is analyzed."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from hoa_scout.domain.hoa.value_objects.hoa_search_result import HOASearchResult


class ResearchTopic(str, Enum):
    FINANCIALS = "financials"
    RULES = "rules"
    REVIEWS = "reviews"


@dataclass(frozen=True)
class ResearchFinding:
    """
    Answer of one research lookup.

    ``data`` holds the provider's JSON answer as-is (fees, assessments,
    lawsuits for financials; rental, pet and parking rules for rules;
    sentiment and complaints for reviews). Lookups never raise; failures
    come back with ``success=False`` and ``error`` set.
    """

    topic: ResearchTopic
    success: bool
    found_info: bool = False
    data: dict[str, Any] = field(default_factory=dict)
    sources: tuple[str, ...] = ()
    response_time_ms: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def failure(
        cls,
        topic: ResearchTopic,
        error: str,
        response_time_ms: Optional[int] = None,
    ) -> ResearchFinding:
        return cls(
            topic=topic,
            success=False,
            error=error,
            response_time_ms=response_time_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "success": self.success,
            "found_info": self.found_info,
            "data": dict(self.data),
            "sources": list(self.sources),
        }
        if self.response_time_ms is not None:
            result["response_time_ms"] = self.response_time_ms
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass(frozen=True)
class HOAEvidence:
    """Everything gathered for one analysis run.

    ``contact_search`` is only set when the stored public records had no
    phone, email or website and a second lookup was made.
    """

    contact_search: Optional[HOASearchResult] = None
    findings: tuple[ResearchFinding, ...] = ()

    def finding(self, topic: ResearchTopic) -> Optional[ResearchFinding]:
        for finding in self.findings:
            if finding.topic is topic:
                return finding
        return None

    def found_data(self, topic: ResearchTopic) -> dict[str, Any]:
        """Answer data of a topic, or ``{}`` when nothing verifiable was found."""
        finding = self.finding(topic)
        if finding is None or not finding.found_info:
            return {}
        return finding.data

    @property
    def lawsuits(self) -> list[Any]:
        lawsuits = self.found_data(ResearchTopic.FINANCIALS).get("lawsuits")
        return lawsuits if isinstance(lawsuits, list) else []

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            finding.topic.value: finding.to_dict() for finding in self.findings
        }
        if self.contact_search is not None:
            result["contact_search"] = self.contact_search.contact_dict()
        return result
