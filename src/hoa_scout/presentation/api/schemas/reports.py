"""Schema for the rendered HOA report document."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from hoa_scout.domain.hoa.value_objects import HOAFlag
from hoa_scout.presentation.api.schemas.hoa import EnrichmentStatusResponse


class FlagResponse(BaseModel):
    title: str
    description: str = ""
    severity: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def from_flag(cls, flag: HOAFlag) -> "FlagResponse":
        return cls(
            title=flag.title,
            description=flag.description,
            severity=flag.severity,
            source=flag.source,
        )


class ScoreBreakdownResponse(BaseModel):
    financial_health: Optional[float] = None
    restrictiveness: Optional[float] = None
    management_quality: Optional[float] = None
    community_sentiment: Optional[float] = None
    legal_risk: Optional[float] = None


class OverallScoreResponse(BaseModel):
    value: float
    label: str = Field(..., description="Excellent, Good, Fair, Poor or Critical")
    color_class: str
    bg_color_class: str


class ReportResponse(BaseModel):
    """Everything the report page renders for one HOA."""

    id: str
    hoa_name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    management_company: Optional[str] = None
    monthly_fee: Optional[float] = None
    monthly_fee_display: str
    total_units: Optional[int] = None
    total_units_display: str
    score: Optional[OverallScoreResponse] = None
    scores: ScoreBreakdownResponse
    one_sentence_summary: Optional[str] = None
    red_flags: list[FlagResponse] = Field(default_factory=list)
    yellow_flags: list[FlagResponse] = Field(default_factory=list)
    green_flags: list[FlagResponse] = Field(default_factory=list)
    questions_to_ask: list[str] = Field(default_factory=list)
    documents_to_request: list[str] = Field(default_factory=list)
    data_completeness: Optional[int] = None
    enrichment: EnrichmentStatusResponse
    analysis_pending: bool
    last_updated: datetime
    last_updated_display: str
