from hoa_scout.domain.hoa.entities.hoa_profile import HOAProfile

__all__ = ["HOAProfile"]
