"""SQLAlchemy model for the HOAProfile entity."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from hoa_scout.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")

Score = Numeric(3, 1, asdecimal=False)


def _new_id() -> str:
    return str(uuid4())


class HOAProfileModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting HOAProfile entities.

    Enrichment data lives in ``public_records`` and the raw analyzer output
    in ``ai_analysis``; flags, questions and documents are JSON lists.
    """

    __tablename__ = "hoa_profiles"

    __table_args__ = (
        UniqueConstraint("hoa_name", "city", "state", name="unique_hoa_location"),
        CheckConstraint(
            "overall_score IS NULL OR (overall_score >= 0 AND overall_score <= 10)",
            name="check_overall_score_range",
        ),
        Index("idx_hoa_location", "city", "state", "zip_code"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    hoa_name: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    # Location
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    zip_code: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)

    # Basic info
    monthly_fee: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
    )
    total_units: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    management_company: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Scores (null until analysis completes)
    overall_score: Mapped[Optional[float]] = mapped_column(Score, nullable=True)
    financial_health_score: Mapped[Optional[float]] = mapped_column(Score)
    restrictiveness_score: Mapped[Optional[float]] = mapped_column(Score)
    management_quality_score: Mapped[Optional[float]] = mapped_column(Score)
    community_sentiment_score: Mapped[Optional[float]] = mapped_column(Score)

    one_sentence_summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Raw data
    public_records: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=True,
    )
    ai_analysis: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=True,
    )

    # Flags and buyer guidance
    red_flags: Mapped[list[Any]] = mapped_column(JSONType, default=list)
    yellow_flags: Mapped[list[Any]] = mapped_column(JSONType, default=list)
    green_flags: Mapped[list[Any]] = mapped_column(JSONType, default=list)
    questions_to_ask: Mapped[list[Any]] = mapped_column(JSONType, default=list)
    documents_to_request: Mapped[list[Any]] = mapped_column(JSONType, default=list)

    data_completeness: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        default=0,
    )

    def __repr__(self) -> str:
        return (
            f"<HOAProfileModel(id={self.id}, "
            f"hoa_name={self.hoa_name!r}, city={self.city!r})>"
        )
