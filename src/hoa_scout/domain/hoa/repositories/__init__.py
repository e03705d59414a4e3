from hoa_scout.domain.hoa.repositories.hoa_profile_repository import (
    CITY_SCAN_LIMIT,
    HOAProfileRepository,
)

__all__ = ["CITY_SCAN_LIMIT", "HOAProfileRepository"]
