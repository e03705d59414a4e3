"""Result of a web search for information about an HOA."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class HOASearchQuery:
    """What the search provider is asked to look up."""

    hoa_name: str
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    address: Optional[str] = None
    # Narrow the follow-up research lookups
    management_company: Optional[str] = None
    subdivision_name: Optional[str] = None


@dataclass(frozen=True)
class HOASearchResult:
    """
    Transient result returned by a search provider.

    Providers never raise for lookup failures; they return ``success=False``
    with ``error`` set instead.
    """

    success: bool
    found_info: bool = False
    management_company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    subdivision_name: Optional[str] = None
    monthly_fee: Optional[str] = None
    hoa_exists: Optional[bool] = None
    found_online: Optional[bool] = None
    document_number: Optional[str] = None
    sources: tuple[str, ...] = ()
    search_strategy: Optional[str] = None
    response_time_ms: Optional[int] = None
    county: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(
        cls,
        error: str,
        response_time_ms: Optional[int] = None,
    ) -> "HOASearchResult":
        return cls(success=False, error=error, response_time_ms=response_time_ms)

    def contact_dict(self) -> dict[str, Any]:
        """Contact details plus provenance, as stored with an analysis."""
        return {
            "success": self.success,
            "found_info": self.found_info,
            "phone": self.phone,
            "email": self.email,
            "website": self.website,
            "address": self.address,
            "sources": list(self.sources),
            "response_time_ms": self.response_time_ms,
            "error": self.error,
        }
