"""Report page cache port.

Rendered reports are cached under their route path so that writers can
invalidate exactly the page they changed.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

REPORT_PATH_TEMPLATE = "/reports/{hoa_id}"


def report_path(hoa_id: str) -> str:
    return REPORT_PATH_TEMPLATE.format(hoa_id=hoa_id)


class ReportCache(Protocol):
    """Path-keyed cache for rendered report documents."""

    def get(self, path: str) -> Optional[dict[str, Any]]:
        """Return the cached document for ``path`` or None if absent/expired."""
        ...

    def set(self, path: str, document: dict[str, Any]) -> None:
        """Store a rendered document under ``path``."""
        ...

    def invalidate(self, path: str) -> None:
        """Drop the entry for ``path`` so the next read re-renders it."""
        ...
