import logging
import os

import anthropic

from trademark_evidence.data import (
    APICallUsage,
    ArticleResult,
    GroundingChunkWeb,
    SearchParameters,
    Usage,
)
from trademark_evidence.errors import ConfigurationError, ProviderError
from trademark_evidence.search.parser import ARTICLE_DELIMITER, parse_article_blocks

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """\
You are an AI assistant specialized in Proof of Use of Trademarks.
Your task is to find articles using web search based on the following criteria:
Trademark: "{trademark}" (must appear verbatim)
Date Range: From {start_date} to {end_date}
Language: {language}
Country/Region of Origin: {country}

For each relevant article found, provide the information in the following \
format, with each piece of information on a new line, and each article \
separated by '{delimiter}':
HEADLINE: [Article Headline]
DATE: [Publication Date, e.g., YYYY-MM-DD or Month Day, Year]
SNIPPET: [A short quote from the article where the trademark "{trademark}" appears verbatim.]
URL: [Full URL of the article]
LANGUAGE: [Language of the article, e.g., English, Spanish]
COUNTRY: [Country of origin of the article, e.g., USA, UK]

If no articles are found matching all criteria, respond with \
'No articles found matching the criteria.'
Ensure the trademark term "{trademark}" appears verbatim in the snippet.
Prioritize sources that are clearly news articles, official publications, \
or reputable industry websites.\
"""


def build_prompt(params: SearchParameters) -> str:
    """Render the article-finding prompt for ``params``."""
    return PROMPT_TEMPLATE.format(
        trademark=params.trademark,
        start_date=params.start_date.isoformat(),
        end_date=params.end_date.isoformat(),
        language=params.language,
        country=params.country,
        delimiter=ARTICLE_DELIMITER,
    )


class ClaudeSearcher:
    """Find trademark articles with Claude's built-in web search tool.

    Claude is asked to return one delimited block per article; the blocks are
    parsed into ``ArticleResult`` objects and the web search results it
    consulted are returned as grounding citations.

    Args:
        api_key: Anthropic API key (defaults to CLAUDE_API_KEY env var).
        model: Model to use for search (default: claude-haiku-4-5-20251001).
        max_searches: Max web searches Claude may run per request (default: 5).
        max_tokens: Response token budget (default: 4096).
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "claude-haiku-4-5-20251001",
        max_searches: int = 5,
        max_tokens: int = 4096,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        if not resolved_key:
            raise ConfigurationError(
                "Claude API key required. Pass api_key or set CLAUDE_API_KEY env var."
            )
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_searches = max_searches
        self._max_tokens = max_tokens

    async def search(
        self, params: SearchParameters
    ) -> tuple[list[ArticleResult], list[GroundingChunkWeb], Usage]:
        """Search for articles matching the given parameters.

        Args:
            params: The search parameters.

        Returns:
            Tuple of (articles, grounding citations, usage).

        Raises:
            ProviderError: If the Anthropic API call fails.
        """
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                tools=[
                    {
                        "type": "web_search_20250305",
                        "name": "web_search",
                        "max_uses": self._max_searches,
                    }
                ],
                messages=[{"role": "user", "content": build_prompt(params)}],
            )
        except anthropic.APIError as e:
            raise ProviderError(f"Claude search failed: {e}", provider="claude") from e

        web_searches = 0
        server_tool_use = getattr(response.usage, "server_tool_use", None)
        if server_tool_use is not None:
            web_searches = getattr(server_tool_use, "web_search_requests", 0) or 0

        usage = Usage(
            api_calls=[
                APICallUsage(
                    model=self._model,
                    input_tokens=response.usage.input_tokens,
                    output_tokens=response.usage.output_tokens,
                    web_searches=web_searches,
                ),
            ],
        )

        # Only text after the last search result is the answer; citation
        # splits inside it are rejoined without a separator.
        answer_parts: list[str] = []
        sources: list[GroundingChunkWeb] = []
        seen_uris: set[str] = set()
        for block in response.content:
            if block.type == "text":
                answer_parts.append(block.text)
            elif block.type == "web_search_tool_result":
                answer_parts = []
                content = block.content
                if not isinstance(content, list):
                    # Search errors come back as a single error object
                    logger.warning("Claude web search returned an error: %s", content)
                    continue
                for result in content:
                    uri = getattr(result, "url", None)
                    title = getattr(result, "title", None)
                    if uri and title and uri not in seen_uris:
                        seen_uris.add(uri)
                        sources.append(GroundingChunkWeb(uri=uri, title=title))

        articles = parse_article_blocks("".join(answer_parts), params)
        logger.info(
            f"Claude search returned {len(articles)} articles and {len(sources)} sources"
        )
        return (articles, sources, usage)
