"""Typed enrichment record stored in an HOA profile's ``public_records`` column."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from hoa_scout.domain.shared.time import parse_iso_datetime


class Confidence(str, Enum):
    """How much the enrichment data can be trusted."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: Any) -> Optional["Confidence"]:
        if value is None:
            return None
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


def _pick(data: dict[str, Any], *keys: str) -> Any:
    # Records written by older clients used camelCase keys.
    for key in keys:
        if key in data:
            return data[key]
    return None


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class ManagementCompanyInfo:
    """Management company as known after enrichment."""

    name: Optional[str] = None
    verified: bool = False
    source: Optional[str] = None  # "web_search" or "sunbiz"

    @classmethod
    def from_dict(cls, data: Any) -> Optional[ManagementCompanyInfo]:
        if not isinstance(data, dict):
            return None
        return cls(
            name=data.get("name"),
            verified=bool(data.get("verified", False)),
            source=data.get("source"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "verified": self.verified, "source": self.source}


@dataclass(frozen=True)
class ContactInfo:
    """Contact details found for the association."""

    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    verified: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Optional[ContactInfo]:
        if not isinstance(data, dict):
            return None
        return cls(
            phone=data.get("phone"),
            email=data.get("email"),
            website=data.get("website"),
            address=data.get("address"),
            verified=bool(data.get("verified", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "phone": self.phone,
            "email": self.email,
            "website": self.website,
            "address": self.address,
            "verified": self.verified,
        }


@dataclass(frozen=True)
class ProviderResponse:
    """Summary of the raw search-provider response kept for auditing."""

    found_info: bool = False
    found_online: Optional[bool] = None
    sources: tuple[str, ...] = ()
    search_strategy: Optional[str] = None
    response_time_ms: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional[ProviderResponse]:
        if not isinstance(data, dict):
            return None
        sources = _pick(data, "sources") or ()
        return cls(
            found_info=bool(_pick(data, "found_info", "foundInfo")),
            found_online=_pick(data, "found_online", "foundOnline"),
            sources=tuple(str(s) for s in sources),
            search_strategy=_pick(data, "search_strategy", "searchStrategy"),
            response_time_ms=_pick(data, "response_time_ms", "responseTimeMs"),
            error=data.get("error"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"found_info": self.found_info}
        result.update(
            _drop_none(
                {
                    "found_online": self.found_online,
                    "search_strategy": self.search_strategy,
                    "response_time_ms": self.response_time_ms,
                    "error": self.error,
                }
            )
        )
        if self.sources:
            result["sources"] = list(self.sources)
        return result


# Known keys and the legacy camelCase spellings accepted on read.
_KNOWN_KEYS: dict[str, tuple[str, ...]] = {
    "enriched": ("enriched",),
    "enriched_at": ("enriched_at", "enrichedAt"),
    "source": ("source",),
    "confidence": ("confidence",),
    "error": ("error",),
    "management_company": ("management_company", "managementCompany"),
    "contact_info": ("contact_info", "contactInfo"),
    "subdivision_name": ("subdivision_name", "subdivisionName"),
    "monthly_fee_estimate": ("monthly_fee_estimate", "monthlyFeeEstimate"),
    "hoa_exists": ("hoa_exists", "hoaExists"),
    "provider_response": (
        "provider_response",
        "providerResponse",
        "perplexityResponse",
    ),
}


@dataclass(frozen=True)
class PublicRecords:
    """
    Enrichment data attached to an HOA profile.

    Unknown keys found in stored JSON are kept in ``extra`` and written back
    unchanged, so data added by other tools survives an enrichment pass.
    """

    enriched: bool = False
    enriched_at: Optional[datetime] = None
    source: Optional[str] = None
    confidence: Optional[Confidence] = None
    error: Optional[str] = None
    management_company: Optional[ManagementCompanyInfo] = None
    contact_info: Optional[ContactInfo] = None
    subdivision_name: Optional[str] = None
    monthly_fee_estimate: Optional[str] = None
    hoa_exists: Optional[bool] = None
    provider_response: Optional[ProviderResponse] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return bool(self.provider_response and self.provider_response.found_info)

    @classmethod
    def empty(cls) -> PublicRecords:
        return cls()

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> PublicRecords:
        if not data:
            return cls()

        consumed = {alias for aliases in _KNOWN_KEYS.values() for alias in aliases}
        extra = {k: v for k, v in data.items() if k not in consumed}

        # Legacy records stored the management company as a bare string.
        raw_company = _pick(data, *_KNOWN_KEYS["management_company"])
        if isinstance(raw_company, str):
            company = ManagementCompanyInfo(name=raw_company)
        else:
            company = ManagementCompanyInfo.from_dict(raw_company)

        return cls(
            enriched=bool(_pick(data, "enriched")),
            enriched_at=parse_iso_datetime(
                _pick(data, *_KNOWN_KEYS["enriched_at"]),
            ),
            source=_pick(data, "source"),
            confidence=Confidence.parse(_pick(data, "confidence")),
            error=_pick(data, "error"),
            management_company=company,
            contact_info=ContactInfo.from_dict(
                _pick(data, *_KNOWN_KEYS["contact_info"]),
            ),
            subdivision_name=_pick(data, *_KNOWN_KEYS["subdivision_name"]),
            monthly_fee_estimate=_pick(data, *_KNOWN_KEYS["monthly_fee_estimate"]),
            hoa_exists=_pick(data, *_KNOWN_KEYS["hoa_exists"]),
            provider_response=ProviderResponse.from_dict(
                _pick(data, *_KNOWN_KEYS["provider_response"]),
            ),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(self.extra)
        result["enriched"] = self.enriched
        result.update(
            _drop_none(
                {
                    "enriched_at": (
                        self.enriched_at.isoformat() if self.enriched_at else None
                    ),
                    "source": self.source,
                    "confidence": self.confidence.value if self.confidence else None,
                    "error": self.error,
                    "management_company": (
                        self.management_company.to_dict()
                        if self.management_company
                        else None
                    ),
                    "contact_info": (
                        self.contact_info.to_dict() if self.contact_info else None
                    ),
                    "subdivision_name": self.subdivision_name,
                    "monthly_fee_estimate": self.monthly_fee_estimate,
                    "hoa_exists": self.hoa_exists,
                    "provider_response": (
                        self.provider_response.to_dict()
                        if self.provider_response
                        else None
                    ),
                }
            )
        )
        return result
