"""Trademark Evidence: find published articles that show a trademark in use."""

from trademark_evidence.config import TrademarkEvidenceConfig, create_from_config, load_config
from trademark_evidence.data import (
    APICallUsage,
    ArticleResult,
    ContextRelevance,
    DateResolution,
    DateSource,
    GroundingChunkWeb,
    RelevanceDetails,
    SearchItem,
    SearchParameters,
    Usage,
)
from trademark_evidence.dates import DateResolver, parse_date_value
from trademark_evidence.errors import (
    ConfigurationError,
    FetchFailure,
    ProviderError,
    RateLimited,
    SearchFailedError,
    TrademarkEvidenceError,
)
from trademark_evidence.pipeline import (
    FallbackPipeline,
    FallbackReason,
    Pipeline,
    SearchMethod,
    SearchOutcome,
    SearchState,
)
from trademark_evidence.presentation import average_relevance, group_by_year
from trademark_evidence.query import build_query
from trademark_evidence.run_logger import RunLogger
from trademark_evidence.scoring import rank_articles, score_relevance
from trademark_evidence.search import (
    ClaudeSearcher,
    GoogleSearcher,
    TrademarkSearcher,
    parse_article_blocks,
)

__all__ = [
    # Models
    "APICallUsage",
    "ArticleResult",
    "ContextRelevance",
    "DateResolution",
    "DateSource",
    "GroundingChunkWeb",
    "RelevanceDetails",
    "SearchItem",
    "SearchParameters",
    "Usage",
    # Errors
    "ConfigurationError",
    "FetchFailure",
    "ProviderError",
    "RateLimited",
    "SearchFailedError",
    "TrademarkEvidenceError",
    # Functions
    "average_relevance",
    "build_query",
    "group_by_year",
    "parse_article_blocks",
    "parse_date_value",
    "rank_articles",
    "score_relevance",
    # Protocols
    "Pipeline",
    "TrademarkSearcher",
    # Components
    "ClaudeSearcher",
    "DateResolver",
    "GoogleSearcher",
    # Pipelines
    "FallbackPipeline",
    "FallbackReason",
    "SearchMethod",
    "SearchOutcome",
    "SearchState",
    # Logging
    "RunLogger",
    # Config
    "TrademarkEvidenceConfig",
    "create_from_config",
    "load_config",
]
