"""Heuristic 1-5 relevance scoring for search hits."""

from dataclasses import dataclass

from trademark_evidence.data import ArticleResult, ContextRelevance, RelevanceDetails
from trademark_evidence.text import count_occurrences

MAX_SCORE = 5


@dataclass(frozen=True)
class RelevanceScore:
    score: int
    details: RelevanceDetails


def _first_sentence(snippet: str) -> str:
    return snippet.split(".", 1)[0]


def score_relevance(title: str, snippet: str, trademark: str) -> RelevanceScore:
    """Score how central ``trademark`` is to a hit.

    Context is "high" when the title mentions the trademark, "medium" when the
    snippet's first sentence does or when it occurs at least twice, and "low"
    otherwise. Only the first two cases count as main content.

    The base score follows the whole-word occurrence count (1, 2, or 3 for
    three or more) with +2 for high and +1 for medium context, capped at 5.
    """
    occurrences = count_occurrences(f"{title} {snippet}", trademark)
    needle = trademark.lower()

    if needle in title.lower():
        context = ContextRelevance.HIGH
        main_content = True
    elif needle in _first_sentence(snippet).lower():
        context = ContextRelevance.MEDIUM
        main_content = True
    elif occurrences >= 2:
        context = ContextRelevance.MEDIUM
        main_content = False
    else:
        context = ContextRelevance.LOW
        main_content = False

    if occurrences >= 3:
        score = 3
    elif occurrences >= 2:
        score = 2
    else:
        score = 1

    if context is ContextRelevance.HIGH:
        score += 2
    elif context is ContextRelevance.MEDIUM:
        score += 1

    return RelevanceScore(
        score=min(MAX_SCORE, score),
        details=RelevanceDetails(
            keyword_frequency=occurrences,
            context_relevance=context,
            is_main_content=main_content,
        ),
    )


def rank_articles(articles: list[ArticleResult]) -> list[ArticleResult]:
    """Order by relevance score, most relevant first, then most recent first.

    Articles equal on both keys keep their original order.
    """
    return sorted(articles, key=lambda a: (a.relevance_score or 0, a.date), reverse=True)
