"""Factory protocol handing out repositories bound to one unit of work."""

from __future__ import annotations

from typing import Any, Protocol

from hoa_scout.domain.hoa.repositories import HOAProfileRepository


class RepositoryFactory(Protocol):
    """Creates repositories that share one database session.

    Commands call ``session.commit()`` once their writes are done, so the
    session is exposed here as well. It is typed ``Any`` to keep SQLAlchemy
    out of the application layer.
    """

    @property
    def session(self) -> Any: ...

    def hoa_profile_repository(self) -> HOAProfileRepository: ...
