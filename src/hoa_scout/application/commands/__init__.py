"""Application commands (write side)."""

from hoa_scout.application.commands.analyze_hoa_command import (
    AnalysisResult,
    AnalyzeHOACommand,
)
from hoa_scout.application.commands.enrich_hoa_command import (
    EnrichHOACommand,
    EnrichmentOutcome,
)

__all__ = [
    "AnalysisResult",
    "AnalyzeHOACommand",
    "EnrichHOACommand",
    "EnrichmentOutcome",
]
