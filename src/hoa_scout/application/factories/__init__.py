"""Application factories for repository access."""

from hoa_scout.application.factories.repository_factory import RepositoryFactory

__all__ = ["RepositoryFactory"]
