"""Freshness window deciding whether stored enrichment can be reused."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from hoa_scout.domain.hoa.value_objects.public_records import PublicRecords
from hoa_scout.domain.shared.time import ensure_tz_aware

DEFAULT_FRESHNESS_DAYS = 30


@dataclass(frozen=True)
class EnrichmentFreshnessPolicy:
    """Enrichment is fresh while ``now - enriched_at`` is below the window."""

    window: timedelta = timedelta(days=DEFAULT_FRESHNESS_DAYS)

    def __post_init__(self) -> None:
        if self.window <= timedelta(0):
            msg = f"Freshness window must be positive, got {self.window}"
            raise ValueError(msg)

    @classmethod
    def from_days(cls, days: int) -> "EnrichmentFreshnessPolicy":
        return cls(window=timedelta(days=days))

    def is_fresh(self, now: datetime, records: PublicRecords) -> bool:
        if not records.enriched or records.enriched_at is None:
            return False
        age = ensure_tz_aware(now) - ensure_tz_aware(records.enriched_at)
        return age < self.window
