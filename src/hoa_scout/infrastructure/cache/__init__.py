from hoa_scout.infrastructure.cache.report_cache import InMemoryReportCache

__all__ = ["InMemoryReportCache"]
