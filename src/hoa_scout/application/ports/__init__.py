"""Application ports (interfaces implemented by infrastructure)."""

from hoa_scout.application.ports.report_cache import (
    REPORT_PATH_TEMPLATE,
    ReportCache,
    report_path,
)

__all__ = ["REPORT_PATH_TEMPLATE", "ReportCache", "report_path"]
