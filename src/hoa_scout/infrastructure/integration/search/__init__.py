"""Web search providers for HOA enrichment."""

from hoa_scout.infrastructure.integration.search.perplexity_search_provider import (
    PerplexitySearchProvider,
)
from hoa_scout.infrastructure.integration.search.retry import RetryPolicy

__all__ = ["PerplexitySearchProvider", "RetryPolicy"]
