from trademark_evidence.pipeline.base import (
    FallbackReason,
    Pipeline,
    SearchMethod,
    SearchOutcome,
    SearchState,
)
from trademark_evidence.pipeline.fallback import (
    NO_RESULTS_MESSAGE,
    FallbackPipeline,
    verify_articles,
)

__all__ = [
    "FallbackPipeline",
    "FallbackReason",
    "NO_RESULTS_MESSAGE",
    "Pipeline",
    "SearchMethod",
    "SearchOutcome",
    "SearchState",
    "verify_articles",
]
