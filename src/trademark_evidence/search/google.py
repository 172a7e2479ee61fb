"""Direct article search through the Google Custom Search JSON API."""

import asyncio
import logging
import os
from datetime import date

import httpx

from trademark_evidence.data import (
    ArticleResult,
    GroundingChunkWeb,
    SearchItem,
    SearchParameters,
    Usage,
)
from trademark_evidence.dates import DateResolver
from trademark_evidence.errors import ConfigurationError, ProviderError, RateLimited
from trademark_evidence.query import build_query, date_restrict
from trademark_evidence.scoring import rank_articles, score_relevance
from trademark_evidence.text import contains_trademark, highlight_trademark

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"

logger = logging.getLogger(__name__)


class GoogleSearcher:
    """Page through Custom Search results and keep verified, dated articles.

    Each hit must contain the trademark verbatim. Hits are scored, dated via
    ``DateResolver`` and kept only when the date lies inside the requested
    range. Items are processed one at a time, so at most one request is in
    flight.

    Args:
        api_key: API key (defaults to GOOGLE_SEARCH_API_KEY env var).
        cx: Programmable search engine id (defaults to GOOGLE_SEARCH_CX env var).
        max_pages: Page budget per search (default 10).
        page_size: Results per page, at most 10 (default 10).
        page_delay_seconds: Pause between consecutive pages (default 0.5).
        inspect_source: Fetch pages whose date is not in metadata or text.
        timeout_seconds: HTTP client timeout.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        cx: str | None = None,
        max_pages: int = 10,
        page_size: int = 10,
        page_delay_seconds: float = 0.5,
        inspect_source: bool = True,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._api_key = api_key or os.environ.get("GOOGLE_SEARCH_API_KEY")
        self._cx = cx or os.environ.get("GOOGLE_SEARCH_CX")
        if not self._api_key or not self._cx:
            raise ConfigurationError(
                "Google Search API key and engine id required. Pass api_key and cx "
                "or set GOOGLE_SEARCH_API_KEY and GOOGLE_SEARCH_CX env vars."
            )
        self._max_pages = max_pages
        self._page_size = min(page_size, 10)
        self._page_delay = page_delay_seconds
        self._inspect_source = inspect_source
        self._timeout = timeout_seconds

    async def search(
        self, params: SearchParameters
    ) -> tuple[list[ArticleResult], list[GroundingChunkWeb], Usage]:
        """Search for articles matching the given parameters.

        A 429 from the provider stops pagination and returns what was
        collected so far. An empty page also ends the search.

        Args:
            params: The search parameters.

        Returns:
            Tuple of (articles ranked by relevance then recency, [], usage).

        Raises:
            ProviderError: On any other non-success response or transport error.
        """
        query = build_query(params)
        usage = Usage()
        articles: list[ArticleResult] = []
        seen_urls: set[str] = set()

        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            resolver = DateResolver.default(client if self._inspect_source else None, usage=usage)

            for page in range(self._max_pages):
                try:
                    items = await self._fetch_page(client, query, params, page, usage)
                except RateLimited:
                    logger.warning("Rate limit reached on page %d, stopping search", page + 1)
                    break

                if not items:
                    logger.info("No more results found on page %d", page + 1)
                    break

                for item in items:
                    if item.link in seen_urls:
                        continue
                    article = await self._evaluate(item, params, resolver)
                    if article is not None:
                        seen_urls.add(article.url)
                        articles.append(article)

                if page < self._max_pages - 1:
                    await asyncio.sleep(self._page_delay)

        logger.info(f"Google Search accepted {len(articles)} articles for {params.trademark!r}")
        return (rank_articles(articles), [], usage)

    async def _fetch_page(
        self,
        client: httpx.AsyncClient,
        query: str,
        params: SearchParameters,
        page: int,
        usage: Usage,
    ) -> list[SearchItem]:
        """Request one page of results."""
        request_params: dict[str, str | int] = {
            "key": self._api_key,  # type: ignore[dict-item]
            "cx": self._cx,  # type: ignore[dict-item]
            "q": query,
            "start": page * self._page_size + 1,
            "num": self._page_size,
            "dateRestrict": date_restrict(params),
        }

        logger.info("Fetching page %d with query: %s", page + 1, query)
        usage.google_requests += 1
        try:
            response = await client.get(GOOGLE_SEARCH_URL, params=request_params)
        except httpx.HTTPError as e:
            raise ProviderError(f"Google Search request failed: {e}", provider="google") from e

        if response.status_code == 429:
            raise RateLimited("Google Search rate limit reached")
        if not response.is_success:
            raise ProviderError(
                f"Google Search API error: {response.status_code} {response.reason_phrase}",
                provider="google",
                status_code=response.status_code,
            )

        data = response.json()
        return [SearchItem.from_api(item) for item in data.get("items") or []]

    async def _evaluate(
        self,
        item: SearchItem,
        params: SearchParameters,
        resolver: DateResolver,
    ) -> ArticleResult | None:
        """Turn a hit into an article, or None if it fails any check."""
        if not contains_trademark(item.text, params.trademark):
            logger.debug("Skipping %s: trademark not found verbatim", item.link)
            return None

        relevance = score_relevance(item.title, item.snippet, params.trademark)
        resolution = await resolver.resolve(item)
        if not resolution.found:
            logger.debug("Discarding article without a valid date: %s", item.title)
            return None

        published = date.fromisoformat(resolution.date)
        if not params.contains(published):
            logger.debug("Discarding article outside the date range: %s", resolution.date)
            return None

        return ArticleResult(
            headline=item.title,
            date=resolution.date,
            snippet=highlight_trademark(item.snippet, params.trademark),
            url=item.link,
            language=params.language,
            country=params.country,
            trademark=params.trademark,
            relevance_score=relevance.score,
            relevance_details=relevance.details,
            date_source=resolution.source,
            source_code_link=resolution.source_code_link,
        )
