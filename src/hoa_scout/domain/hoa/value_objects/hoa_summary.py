"""Lightweight HOA projection used by search and browse listings."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HOASummary:
    id: str
    hoa_name: str
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    management_company: Optional[str] = None
    address: Optional[str] = None
