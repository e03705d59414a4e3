"""Search-term and county helpers for Florida HOA lookups."""

import re
from typing import Optional

_GENERIC_PREFIX = "hoa at "

_STREET_SUFFIX = re.compile(
    r"\b(court|ct|street|st|drive|dr|lane|ln|avenue|ave|road|rd|way|place|pl"
    r"|circle|cir|boulevard|blvd|terrace|ter|trail|trl)\b\.?$",
    re.IGNORECASE,
)
_ASSOCIATION_WORDS = re.compile(
    r"\b(homeowners association|hoa|inc\.?|llc|property owners association|poa)\b",
    re.IGNORECASE,
)
_HOUSE_NUMBER = re.compile(r"^\d+\s+(.+)$")

# Approximate county by 3-digit zip prefix (major Florida counties only)
COUNTY_BY_ZIP_PREFIX = {
    "320": "Duval",
    "321": "St. Johns",
    "322": "Alachua",
    "323": "Leon",
    "324": "Escambia",
    "330": "Miami-Dade",
    "331": "Miami-Dade",
    "332": "Miami-Dade",
    "333": "Broward",
    "334": "Palm Beach",
    "335": "Indian River",
    "336": "Polk",
    "337": "Hillsborough",
    "338": "Manatee",
    "339": "Charlotte",
    "340": "Lee",
    "341": "Collier",
    "342": "Orange",
    "346": "Brevard",
    "347": "Volusia",
}


def county_from_zip(zip_code: Optional[str]) -> Optional[str]:
    if not zip_code:
        return None
    return COUNTY_BY_ZIP_PREFIX.get(zip_code.strip()[:3])


def extract_search_terms(hoa_name: str, city: Optional[str] = None) -> list[str]:
    """Build search terms, most specific first.

    Generic "HOA at <address>" names are turned into street-name searches;
    other names are tried as-is and without association suffixes.
    """
    terms: list[str] = []

    if hoa_name.lower().startswith(_GENERIC_PREFIX):
        address = hoa_name[len(_GENERIC_PREFIX) :]
        match = _HOUSE_NUMBER.match(address)
        if match:
            street = _STREET_SUFFIX.sub("", match.group(1)).strip()
            if street:
                terms.append(f"{street} HOA")
                terms.append(f"{street} Homeowners Association")
                terms.append(f"{street} {city}" if city else street)
        return terms

    terms.append(hoa_name)
    clean = re.sub(r"\s{2,}", " ", _ASSOCIATION_WORDS.sub("", hoa_name)).strip()
    if clean and clean != hoa_name:
        terms.append(clean)
    return terms
