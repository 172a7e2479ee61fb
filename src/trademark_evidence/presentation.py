"""Helpers for displaying results grouped by publication year."""

from collections.abc import Iterable

from trademark_evidence.data import ArticleResult, RelevanceDetails
from trademark_evidence.scoring import MAX_SCORE

UNKNOWN_YEAR = "Unknown"


def group_by_year(articles: Iterable[ArticleResult]) -> dict[str, list[ArticleResult]]:
    """Group articles by year, most recent year first.

    Articles keep their incoming order within a year. Articles whose date is
    free text are grouped under ``UNKNOWN_YEAR``, listed last.
    """
    grouped: dict[str, list[ArticleResult]] = {}
    for article in articles:
        grouped.setdefault(article.year or UNKNOWN_YEAR, []).append(article)

    years = sorted((y for y in grouped if y != UNKNOWN_YEAR), reverse=True)
    if UNKNOWN_YEAR in grouped:
        years.append(UNKNOWN_YEAR)
    return {year: grouped[year] for year in years}


def average_relevance(articles: list[ArticleResult]) -> float:
    """Mean relevance score, counting unscored articles as 1."""
    if not articles:
        return 0.0
    return sum(a.relevance_score or 1 for a in articles) / len(articles)


def relevance_distribution(articles: Iterable[ArticleResult]) -> dict[int, int]:
    """Count of articles per star rating, 5 down to 1. Unscored articles count as 1."""
    counts = dict.fromkeys(range(MAX_SCORE, 0, -1), 0)
    for article in articles:
        score = article.relevance_score or 1
        counts[min(max(score, 1), MAX_SCORE)] += 1
    return counts


def describe_relevance(details: RelevanceDetails) -> str:
    """One-line summary such as ``3 mentions, high context, main content``."""
    noun = "mention" if details.keyword_frequency == 1 else "mentions"
    placement = "main content" if details.is_main_content else "incidental mention"
    return (
        f"{details.keyword_frequency} {noun}, "
        f"{details.context_relevance.value} context, {placement}"
    )
