"""Parse the delimited article blocks returned by the AI search path."""

import logging

from trademark_evidence.data import ArticleResult, SearchParameters
from trademark_evidence.dates import parse_date_value

logger = logging.getLogger(__name__)

ARTICLE_DELIMITER = "---ARTICLE---"
NO_ARTICLES_SENTINEL = "no articles found"

# Line prefix -> ArticleResult field
FIELD_PREFIXES: dict[str, str] = {
    "HEADLINE:": "headline",
    "DATE:": "date",
    "SNIPPET:": "snippet",
    "URL:": "url",
    "LANGUAGE:": "language",
    "COUNTRY:": "country",
}

REQUIRED_FIELDS = ("headline", "date", "snippet", "url")


def _normalize_date(raw: str) -> str:
    """ISO date when the model's date parses, otherwise the text as given."""
    parsed = parse_date_value(raw)
    return parsed.isoformat() if parsed is not None else raw


def parse_article_blocks(text: str, params: SearchParameters) -> list[ArticleResult]:
    """Parse a formatted AI response into articles.

    A response starting with the "no articles found" sentinel yields an empty
    list. Blocks that lack a headline, date, snippet or URL are logged and
    skipped. LANGUAGE and COUNTRY lines override the search parameters.

    Args:
        text: Full response text.
        params: The search parameters the response answers.

    Returns:
        Articles in response order.
    """
    if text.strip().lower().startswith(NO_ARTICLES_SENTINEL):
        return []

    articles: list[ArticleResult] = []
    blocks = [block.strip() for block in text.split(ARTICLE_DELIMITER)]
    for block in (b for b in blocks if b):
        fields: dict[str, str] = {
            "language": params.language,
            "country": params.country,
        }
        for line in block.splitlines():
            line = line.strip()
            for prefix, name in FIELD_PREFIXES.items():
                if line.startswith(prefix):
                    value = line[len(prefix) :].strip()
                    if value:
                        fields[name] = value
                    break

        missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
        if missing:
            logger.warning(
                "Skipping partially parsed article block (missing %s): %r", missing, block
            )
            continue

        articles.append(
            ArticleResult(
                headline=fields["headline"],
                date=_normalize_date(fields["date"]),
                snippet=fields["snippet"],
                url=fields["url"],
                language=fields["language"],
                country=fields["country"],
                trademark=params.trademark,
            )
        )
    return articles
