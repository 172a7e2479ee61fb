"""Pipeline protocol and the outcome of one search run."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from trademark_evidence.data import ArticleResult, GroundingChunkWeb, SearchParameters, Usage


class SearchState(StrEnum):
    """States a search run passes through."""

    IDLE = "idle"
    TRYING_DIRECT = "trying_direct"
    TRYING_AI_FALLBACK = "trying_ai_fallback"
    DONE = "done"
    FAILED = "failed"


class SearchMethod(StrEnum):
    """Which path produced the final results."""

    DIRECT = "direct"
    AI_FALLBACK = "ai_fallback"


class FallbackReason(StrEnum):
    """Why the AI path was tried."""

    NO_RESULTS = "no_results"
    DIRECT_ERROR = "direct_error"


@dataclass(frozen=True)
class SearchOutcome:
    """Terminal result of a search run."""

    articles: tuple[ArticleResult, ...]
    sources: tuple[GroundingChunkWeb, ...]
    method: SearchMethod
    states: tuple[SearchState, ...]
    usage: Usage = field(default_factory=Usage)
    fallback_reason: FallbackReason | None = None
    direct_error: str | None = None

    @property
    def no_results(self) -> bool:
        """True when no method found any article or citation."""
        return not self.articles and not self.sources


class Pipeline(Protocol):
    """Interface for end-to-end trademark evidence searches."""

    async def run(self, params: SearchParameters) -> SearchOutcome:
        """Execute the pipeline for one set of search parameters.

        Args:
            params: The search parameters.

        Returns:
            The terminal search outcome.

        Raises:
            SearchFailedError: If every configured method failed.
        """
        ...
