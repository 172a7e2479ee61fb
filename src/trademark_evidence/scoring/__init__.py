from trademark_evidence.scoring.relevance import (
    MAX_SCORE,
    RelevanceScore,
    rank_articles,
    score_relevance,
)

__all__ = ["MAX_SCORE", "RelevanceScore", "rank_articles", "score_relevance"]
