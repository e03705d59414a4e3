"""HOA analyzers."""

from hoa_scout.infrastructure.integration.analysis.anthropic_analyzer import (
    AnthropicHOAAnalyzer,
)
from hoa_scout.infrastructure.integration.analysis.rule_based_analyzer import (
    RuleBasedHOAAnalyzer,
    weighted_overall_score,
)

__all__ = [
    "AnthropicHOAAnalyzer",
    "RuleBasedHOAAnalyzer",
    "weighted_overall_score",
]
