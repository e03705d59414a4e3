"""SQLAlchemy models for persistence layer."""

from hoa_scout.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from hoa_scout.infrastructure.persistence.sqlalchemy.models.hoa_profile_model import (
    HOAProfileModel,
)

__all__ = ["Base", "HOAProfileModel", "TimestampMixin"]
