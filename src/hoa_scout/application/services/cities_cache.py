"""Process-wide TTL cache for the distinct city list."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from hoa_scout.domain.shared.time import Clock, utc_now

DEFAULT_CITIES_TTL = timedelta(hours=1)


@dataclass(frozen=True)
class CachedCities:
    cities: tuple[str, ...]
    cached: bool

    @property
    def count(self) -> int:
        return len(self.cities)


class CitiesCache:
    """Single-slot cache; an entry is valid while ``now - captured_at < ttl``.

    Concurrent refreshes after expiry are allowed and the last write wins.
    Loader errors propagate and leave the slot untouched.
    """

    def __init__(self, ttl: timedelta = DEFAULT_CITIES_TTL, clock: Clock = utc_now):
        self._ttl = ttl
        self._clock = clock
        self._cities: Optional[tuple[str, ...]] = None
        self._captured_at: Optional[datetime] = None

    async def get(self, loader: Callable[[], Awaitable[list[str]]]) -> CachedCities:
        now = self._clock()
        if (
            self._cities is not None
            and self._captured_at is not None
            and now - self._captured_at < self._ttl
        ):
            return CachedCities(cities=self._cities, cached=True)

        cities = tuple(await loader())
        self._cities = cities
        self._captured_at = self._clock()
        return CachedCities(cities=cities, cached=False)

    def invalidate(self) -> None:
        self._cities = None
        self._captured_at = None
