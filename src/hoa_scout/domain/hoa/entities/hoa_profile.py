"""HOA profile entity."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from hoa_scout.domain.hoa.value_objects import (
    HOAAnalysis,
    HOAFlag,
    HOAScores,
    PublicRecords,
)
from hoa_scout.domain.shared.text import is_blank
from hoa_scout.domain.shared.time import utc_now


class HOAProfile:
    """
    A homeowners association and everything known about it.

    Profiles are mutated only by enrichment and analysis and are never
    deleted. ``overall_score`` stays None until an analysis completes.
    """

    def __init__(  # noqa: PLR0913
        self,
        hoa_name: str,
        city: Optional[str] = None,
        state: Optional[str] = None,
        zip_code: Optional[str] = None,
        address: Optional[str] = None,
        management_company: Optional[str] = None,
        monthly_fee: Optional[Decimal] = None,
        total_units: Optional[int] = None,
        public_records: Optional[PublicRecords] = None,
        # For reconstitution from persistence:
        id: Optional[str] = None,
        overall_score: Optional[float] = None,
        scores: Optional[HOAScores] = None,
        one_sentence_summary: Optional[str] = None,
        red_flags: tuple[HOAFlag, ...] = (),
        yellow_flags: tuple[HOAFlag, ...] = (),
        green_flags: tuple[HOAFlag, ...] = (),
        questions_to_ask: tuple[str, ...] = (),
        documents_to_request: tuple[str, ...] = (),
        data_completeness: Optional[int] = None,
        ai_analysis: Optional[dict] = None,
        created_at: Optional[datetime] = None,
        last_updated: Optional[datetime] = None,
    ):
        self._id = id or str(uuid4())
        self._hoa_name = hoa_name
        self._city = city
        self._state = state
        self._zip_code = zip_code
        self._address = address
        self._management_company = management_company
        self._monthly_fee = monthly_fee
        self._total_units = total_units
        self._public_records = public_records or PublicRecords.empty()
        self._overall_score = overall_score
        self._scores = scores or HOAScores()
        self._one_sentence_summary = one_sentence_summary
        self._red_flags = tuple(red_flags)
        self._yellow_flags = tuple(yellow_flags)
        self._green_flags = tuple(green_flags)
        self._questions_to_ask = tuple(questions_to_ask)
        self._documents_to_request = tuple(documents_to_request)
        self._data_completeness = data_completeness
        self._ai_analysis = ai_analysis
        self._created_at = created_at or utc_now()
        self._last_updated = last_updated or self._created_at

        self._validate()

    def _validate(self) -> None:
        if not self._hoa_name or not self._hoa_name.strip():
            msg = "HOA name cannot be empty"
            raise ValueError(msg)
        if self._monthly_fee is not None and self._monthly_fee < 0:
            msg = f"Monthly fee cannot be negative, got {self._monthly_fee}"
            raise ValueError(msg)

    @property
    def id(self) -> str:
        return self._id

    @property
    def hoa_name(self) -> str:
        return self._hoa_name

    @property
    def city(self) -> Optional[str]:
        return self._city

    @property
    def state(self) -> Optional[str]:
        return self._state

    @property
    def zip_code(self) -> Optional[str]:
        return self._zip_code

    @property
    def address(self) -> Optional[str]:
        return self._address

    @property
    def management_company(self) -> Optional[str]:
        return self._management_company

    @property
    def monthly_fee(self) -> Optional[Decimal]:
        return self._monthly_fee

    @property
    def total_units(self) -> Optional[int]:
        return self._total_units

    @property
    def public_records(self) -> PublicRecords:
        return self._public_records

    @property
    def overall_score(self) -> Optional[float]:
        return self._overall_score

    @property
    def scores(self) -> HOAScores:
        return self._scores

    @property
    def one_sentence_summary(self) -> Optional[str]:
        return self._one_sentence_summary

    @property
    def red_flags(self) -> tuple[HOAFlag, ...]:
        return self._red_flags

    @property
    def yellow_flags(self) -> tuple[HOAFlag, ...]:
        return self._yellow_flags

    @property
    def green_flags(self) -> tuple[HOAFlag, ...]:
        return self._green_flags

    @property
    def questions_to_ask(self) -> tuple[str, ...]:
        return self._questions_to_ask

    @property
    def documents_to_request(self) -> tuple[str, ...]:
        return self._documents_to_request

    @property
    def data_completeness(self) -> Optional[int]:
        return self._data_completeness

    @property
    def ai_analysis(self) -> Optional[dict]:
        return self._ai_analysis

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def last_updated(self) -> datetime:
        return self._last_updated

    def is_analyzed(self) -> bool:
        return self._overall_score is not None

    def apply_enrichment(
        self,
        records: PublicRecords,
        management_company: Optional[str] = None,
        monthly_fee: Optional[Decimal] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Replace the enrichment record and fill columns that are still empty.

        Stored management company and monthly fee always win over values
        discovered by enrichment.
        """
        self._public_records = records
        if is_blank(self._management_company) and not is_blank(management_company):
            self._management_company = management_company
        if self._monthly_fee is None and monthly_fee is not None:
            self._monthly_fee = monthly_fee
        self._last_updated = now or utc_now()

    def apply_analysis(
        self,
        analysis: HOAAnalysis,
        data_completeness: int,
        ai_analysis: Optional[dict] = None,
        now: Optional[datetime] = None,
    ) -> None:
        self._overall_score = analysis.overall_score
        self._scores = analysis.scores
        self._one_sentence_summary = analysis.one_sentence_summary
        self._red_flags = analysis.red_flags
        self._yellow_flags = analysis.yellow_flags
        self._green_flags = analysis.green_flags
        self._questions_to_ask = analysis.questions_to_ask
        self._documents_to_request = analysis.documents_to_request
        self._data_completeness = data_completeness
        self._ai_analysis = ai_analysis
        self._last_updated = now or utc_now()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HOAProfile):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"HOAProfile(id={self._id!r}, hoa_name={self._hoa_name!r})"
