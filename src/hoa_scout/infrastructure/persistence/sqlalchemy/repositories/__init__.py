"""SQLAlchemy repository implementations."""

from hoa_scout.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)
from hoa_scout.infrastructure.persistence.sqlalchemy.repositories.hoa_profile_repository import (  # noqa: E501
    HOAProfileRepositorySQLAlchemy,
    escape_like,
)

__all__ = [
    "HOAProfileRepositorySQLAlchemy",
    "SQLAlchemyRepositoryFactory",
    "escape_like",
]
