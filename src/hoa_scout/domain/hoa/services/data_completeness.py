"""Data completeness score for an HOA profile."""

from hoa_scout.domain.hoa.entities import HOAProfile

# Points per known fact; total is 100.
_WEIGHTS = {
    "subdivision_name": 10,
    "verified_management": 20,
    "phone": 10,
    "website": 10,
    "email": 5,
    "monthly_fee": 20,
    "total_units": 10,
    "hoa_exists": 5,
    "address": 10,
}


def calculate_data_completeness(profile: HOAProfile) -> int:
    """Return the share (0-100) of key facts known about a profile."""
    records = profile.public_records
    contact = records.contact_info
    company = records.management_company

    known = {
        "subdivision_name": bool(records.subdivision_name),
        "verified_management": bool(company and company.verified),
        "phone": bool(contact and contact.phone),
        "website": bool(contact and contact.website),
        "email": bool(contact and contact.email),
        "monthly_fee": profile.monthly_fee is not None,
        "total_units": bool(profile.total_units),
        "hoa_exists": records.hoa_exists is True,
        "address": bool(profile.address or (contact and contact.address)),
    }
    score = sum(_WEIGHTS[key] for key, present in known.items() if present)
    return round(score * 100 / sum(_WEIGHTS.values()))
