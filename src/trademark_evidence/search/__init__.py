from trademark_evidence.search.base import TrademarkSearcher
from trademark_evidence.search.claude import ClaudeSearcher, build_prompt
from trademark_evidence.search.google import GoogleSearcher
from trademark_evidence.search.parser import (
    ARTICLE_DELIMITER,
    NO_ARTICLES_SENTINEL,
    parse_article_blocks,
)

__all__ = [
    "ARTICLE_DELIMITER",
    "ClaudeSearcher",
    "GoogleSearcher",
    "NO_ARTICLES_SENTINEL",
    "TrademarkSearcher",
    "build_prompt",
    "parse_article_blocks",
]
