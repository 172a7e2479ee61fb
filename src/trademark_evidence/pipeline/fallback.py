"""Direct search with AI-search fallback."""

import logging
import time

from trademark_evidence.data import ArticleResult, SearchParameters, Usage
from trademark_evidence.dates import parse_date_value
from trademark_evidence.errors import SearchFailedError
from trademark_evidence.pipeline.base import (
    FallbackReason,
    SearchMethod,
    SearchOutcome,
    SearchState,
)
from trademark_evidence.run_logger import RunLogger
from trademark_evidence.search.base import TrademarkSearcher
from trademark_evidence.text import contains_trademark

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No articles found with any search method."


class FallbackPipeline:
    """Run the direct searcher and fall back to the AI searcher when needed.

    Flow:
    1. ``TRYING_DIRECT``: run the direct searcher. One or more articles ends
       the run; the fallback is never called.
    2. ``TRYING_AI_FALLBACK``: entered when the direct search found nothing
       or raised. An error here ends the run with ``SearchFailedError``.
    3. ``DONE``: the outcome carries whatever the last attempt produced. An
       empty outcome is a valid result, not an error.

    Args:
        direct: Searcher tried first.
        fallback: Searcher tried when the direct one fails or finds nothing.
        verify_fallback: Keep fallback articles only when the trademark occurs
            verbatim and the date parses inside the requested range.
        run_logger: Optional RunLogger for intermediate result logging.
    """

    def __init__(
        self,
        direct: TrademarkSearcher,
        fallback: TrademarkSearcher | None = None,
        *,
        verify_fallback: bool = False,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._direct = direct
        self._fallback = fallback
        self._verify_fallback = verify_fallback
        self._run_logger = run_logger

    async def run(self, params: SearchParameters) -> SearchOutcome:
        """Execute the search.

        Args:
            params: The search parameters.

        Returns:
            The terminal outcome.

        Raises:
            SearchFailedError: If the fallback raised, or the direct search
                raised and no fallback is configured.
        """
        if self._run_logger:
            self._run_logger.start_run("fallback", params)

        states = [SearchState.IDLE, SearchState.TRYING_DIRECT]
        total_usage = Usage()
        direct_error: str | None = None

        logger.info("Searching directly for %r", params.trademark)
        t0 = time.monotonic()
        try:
            articles, sources, usage = await self._direct.search(params)
        except Exception as e:
            direct_error = str(e)
            reason = FallbackReason.DIRECT_ERROR
            logger.warning(f"Direct search failed: {direct_error}")
            self._log_stage(
                "direct_search", self._direct, params, None, None, t0, error=direct_error
            )
        else:
            total_usage += usage
            self._log_stage("direct_search", self._direct, params, articles, usage, t0)
            if articles:
                logger.info(f"Found {len(articles)} articles with direct search")
                states.append(SearchState.DONE)
                return self._finish(
                    SearchOutcome(
                        articles=tuple(articles),
                        sources=tuple(sources),
                        method=SearchMethod.DIRECT,
                        states=tuple(states),
                        usage=total_usage,
                    )
                )
            reason = FallbackReason.NO_RESULTS
            logger.info("Direct search found no articles")

        if self._fallback is None:
            if direct_error is not None:
                states.append(SearchState.FAILED)
                message = f"Search failed: {direct_error}"
                self._finish_failed(total_usage, message)
                raise SearchFailedError(message)
            states.append(SearchState.DONE)
            logger.info(NO_RESULTS_MESSAGE)
            return self._finish(
                SearchOutcome(
                    articles=(),
                    sources=(),
                    method=SearchMethod.DIRECT,
                    states=tuple(states),
                    usage=total_usage,
                    fallback_reason=reason,
                )
            )

        states.append(SearchState.TRYING_AI_FALLBACK)
        logger.info(f"Trying AI search fallback ({reason.value})")
        t0 = time.monotonic()
        try:
            articles, sources, usage = await self._fallback.search(params)
        except Exception as e:
            logger.error(f"AI search fallback failed: {e}")
            self._log_stage("ai_fallback", self._fallback, params, None, None, t0, error=str(e))
            states.append(SearchState.FAILED)
            message = f"Search failed: {e}"
            self._finish_failed(total_usage, message)
            raise SearchFailedError(message) from e

        total_usage += usage
        self._log_stage("ai_fallback", self._fallback, params, articles, usage, t0)

        if self._verify_fallback:
            t0 = time.monotonic()
            verified = verify_articles(articles, params)
            self._log_stage(
                "fallback_verification",
                "verify_articles",
                {"article_count": len(articles)},
                verified,
                None,
                t0,
            )
            articles = verified

        states.append(SearchState.DONE)
        outcome = SearchOutcome(
            articles=tuple(articles),
            sources=tuple(sources),
            method=SearchMethod.AI_FALLBACK,
            states=tuple(states),
            usage=total_usage,
            fallback_reason=reason,
            direct_error=direct_error,
        )
        if outcome.no_results:
            logger.info(NO_RESULTS_MESSAGE)
        return self._finish(outcome)

    def _log_stage(
        self,
        stage: str,
        component: object,
        input_data: object,
        output_data: object,
        usage: Usage | None,
        started: float,
        *,
        error: str | None = None,
    ) -> None:
        if not self._run_logger:
            return
        name = component if isinstance(component, str) else type(component).__name__
        self._run_logger.log_stage(
            stage=stage,
            component=name,
            input_data=input_data,
            output_data=output_data,
            usage=usage,
            duration_seconds=time.monotonic() - started,
            error=error,
        )

    def _finish(self, outcome: SearchOutcome) -> SearchOutcome:
        if self._run_logger:
            self._run_logger.finish_run(
                list(outcome.articles),
                outcome.usage,
                method=outcome.method.value,
                fallback_reason=outcome.fallback_reason.value if outcome.fallback_reason else None,
            )
        return outcome

    def _finish_failed(self, usage: Usage, message: str) -> None:
        if self._run_logger:
            self._run_logger.finish_run([], usage, error=message)


def verify_articles(articles: list[ArticleResult], params: SearchParameters) -> list[ArticleResult]:
    """Keep articles that mention the trademark verbatim and are dated in range."""
    verified: list[ArticleResult] = []
    for article in articles:
        if not contains_trademark(f"{article.headline} {article.snippet}", params.trademark):
            logger.debug("Dropping fallback article without verbatim match: %s", article.url)
            continue
        published = parse_date_value(article.date)
        if published is None or not params.contains(published):
            logger.debug("Dropping fallback article with unusable date %r", article.date)
            continue
        verified.append(article)
    return verified
