from trademark_evidence.data.models import (
    ALL_COUNTRIES,
    COUNTRY_OPTIONS,
    DATE_NOT_FOUND,
    DEFAULT_LANGUAGE,
    LANGUAGE_OPTIONS,
    OTHER_COUNTRY,
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

__all__ = [
    "ALL_COUNTRIES",
    "APICallUsage",
    "ArticleResult",
    "COUNTRY_OPTIONS",
    "ContextRelevance",
    "DATE_NOT_FOUND",
    "DEFAULT_LANGUAGE",
    "DateResolution",
    "DateSource",
    "GroundingChunkWeb",
    "LANGUAGE_OPTIONS",
    "OTHER_COUNTRY",
    "RelevanceDetails",
    "SearchItem",
    "SearchParameters",
    "Usage",
]
