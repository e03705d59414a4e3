"""In-process TTL cache for rendered report documents."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from hoa_scout.domain.shared.time import Clock, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    document: dict[str, Any]
    stored_at: datetime


class InMemoryReportCache:
    """Path-keyed report cache.

    Entries expire ``ttl_seconds`` after storing. At most ``max_entries``
    documents are held; storing beyond that drops the oldest ones.
    """

    def __init__(
        self,
        ttl_seconds: int = 300,
        max_entries: int = 1000,
        clock: Clock = utc_now,
    ):
        if max_entries < 1:
            msg = "max_entries must be positive"
            raise ValueError(msg)
        self._ttl = timedelta(seconds=ttl_seconds)
        self._max_entries = max_entries
        self._clock = clock
        # Insertion order equals storage order, so the oldest entry is first.
        self._entries: OrderedDict[str, _Entry] = OrderedDict()

    def get(self, path: str) -> Optional[dict[str, Any]]:
        entry = self._entries.get(path)
        if entry is None:
            return None
        if self._expired(entry, self._clock()):
            del self._entries[path]
            return None
        return entry.document

    def set(self, path: str, document: dict[str, Any]) -> None:
        now = self._clock()
        self._entries.pop(path, None)
        self._prune(now)
        while len(self._entries) >= self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Report cache full, evicted %s", evicted)
        self._entries[path] = _Entry(document=document, stored_at=now)

    def invalidate(self, path: str) -> None:
        if self._entries.pop(path, None) is not None:
            logger.debug("Invalidated cached report %s", path)

    def __len__(self) -> int:
        return len(self._entries)

    def _expired(self, entry: _Entry, now: datetime) -> bool:
        return now - entry.stored_at >= self._ttl

    def _prune(self, now: datetime) -> None:
        while self._entries:
            oldest = next(iter(self._entries.values()))
            if not self._expired(oldest, now):
                break
            self._entries.popitem(last=False)
