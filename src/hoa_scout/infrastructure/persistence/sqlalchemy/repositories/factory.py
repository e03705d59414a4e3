"""SQLAlchemy repository factory."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from hoa_scout.infrastructure.persistence.sqlalchemy.repositories.hoa_profile_repository import (  # noqa: E501
    HOAProfileRepositorySQLAlchemy,
)


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._hoa_profile_repo: HOAProfileRepositorySQLAlchemy | None = None

    @property
    def session(self) -> AsyncSession:
        return self._session

    def hoa_profile_repository(self) -> HOAProfileRepositorySQLAlchemy:
        if self._hoa_profile_repo is None:
            self._hoa_profile_repo = HOAProfileRepositorySQLAlchemy(self._session)
        return self._hoa_profile_repo
