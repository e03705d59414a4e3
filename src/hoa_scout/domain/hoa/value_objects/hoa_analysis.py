"""Scores and findings produced by an HOA analyzer."""

from dataclasses import dataclass, field
from typing import Any, Optional


def _check_score(name: str, value: Optional[float]) -> None:
    if value is not None and not 0.0 <= value <= 10.0:
        msg = f"{name} must be between 0 and 10, got {value}"
        raise ValueError(msg)


@dataclass(frozen=True)
class HOAScores:
    """Sub-scores on a 0-10 scale; restrictiveness is higher = stricter."""

    financial_health: Optional[float] = None
    restrictiveness: Optional[float] = None
    management_quality: Optional[float] = None
    community_sentiment: Optional[float] = None
    legal_risk: Optional[float] = None

    def __post_init__(self) -> None:
        _check_score("financial_health", self.financial_health)
        _check_score("restrictiveness", self.restrictiveness)
        _check_score("management_quality", self.management_quality)
        _check_score("community_sentiment", self.community_sentiment)
        _check_score("legal_risk", self.legal_risk)


@dataclass(frozen=True)
class HOAFlag:
    """A single red, yellow or green finding."""

    title: str
    description: str = ""
    severity: Optional[str] = None  # "high", "moderate" or "positive"
    source: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["HOAFlag"]:
        if isinstance(data, str):
            return cls(title=data)
        if not isinstance(data, dict) or not data.get("title"):
            return None
        return cls(
            title=str(data["title"]),
            description=str(data.get("description") or ""),
            severity=data.get("severity"),
            source=data.get("source"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"title": self.title, "description": self.description}
        if self.severity:
            result["severity"] = self.severity
        if self.source:
            result["source"] = self.source
        return result


@dataclass(frozen=True)
class HOAAnalysis:
    """Complete analysis result ready to be applied to a profile."""

    overall_score: float
    scores: HOAScores
    one_sentence_summary: str
    red_flags: tuple[HOAFlag, ...] = ()
    yellow_flags: tuple[HOAFlag, ...] = ()
    green_flags: tuple[HOAFlag, ...] = ()
    questions_to_ask: tuple[str, ...] = ()
    documents_to_request: tuple[str, ...] = ()
    data_completeness: int = 0
    analyzer: str = "rule_based"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_score("overall_score", self.overall_score)
        if not 0 <= self.data_completeness <= 100:
            msg = (
                "data_completeness must be between 0 and 100, "
                f"got {self.data_completeness}"
            )
            raise ValueError(msg)
