"""Tests for FallbackPipeline."""

import json
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from trademark_evidence.data import (
    APICallUsage,
    ArticleResult,
    GroundingChunkWeb,
    SearchParameters,
    Usage,
)
from trademark_evidence.errors import ProviderError, SearchFailedError
from trademark_evidence.pipeline import (
    FallbackPipeline,
    FallbackReason,
    SearchMethod,
    SearchState,
    verify_articles,
)
from trademark_evidence.run_logger import RunLogger


def _article(
    url: str,
    day: str = "2021-06-01",
    snippet: str = "Acme rocks",
    headline: str = "Acme story",
) -> ArticleResult:
    return ArticleResult(
        headline=headline,
        date=day,
        snippet=snippet,
        url=url,
        language="en",
        country="ALL",
        trademark="Acme",
    )


SOURCE = GroundingChunkWeb(uri="https://cited", title="Cited page")


@pytest.fixture
def params() -> SearchParameters:
    return SearchParameters(
        trademark="Acme", start_date=date(2021, 1, 1), end_date=date(2021, 12, 31)
    )


def _searcher(
    articles: list[ArticleResult] | None = None,
    sources: list[GroundingChunkWeb] | None = None,
    usage: Usage | None = None,
    error: Exception | None = None,
) -> MagicMock:
    searcher = MagicMock()
    if error is not None:
        searcher.search = AsyncMock(side_effect=error)
    else:
        searcher.search = AsyncMock(
            return_value=(articles or [], sources or [], usage or Usage())
        )
    return searcher


class TestFallbackPipeline:
    """Tests for the direct-then-AI search flow."""

    async def test_direct_results_skip_fallback(self, params: SearchParameters) -> None:
        direct = _searcher([_article("https://a")], usage=Usage(google_requests=2))
        fallback = _searcher([_article("https://ai")])
        pipeline = FallbackPipeline(direct, fallback)

        outcome = await pipeline.run(params)

        assert outcome.method is SearchMethod.DIRECT
        assert [a.url for a in outcome.articles] == ["https://a"]
        assert outcome.states == (
            SearchState.IDLE,
            SearchState.TRYING_DIRECT,
            SearchState.DONE,
        )
        assert outcome.usage.google_requests == 2
        assert outcome.fallback_reason is None
        fallback.search.assert_not_called()
        direct.search.assert_awaited_once_with(params)

    async def test_empty_direct_falls_back(self, params: SearchParameters) -> None:
        direct = _searcher(usage=Usage(google_requests=1))
        fallback = _searcher(
            [_article("https://ai")],
            [SOURCE],
            Usage(api_calls=[APICallUsage(model="m", input_tokens=10)]),
        )
        pipeline = FallbackPipeline(direct, fallback)

        outcome = await pipeline.run(params)

        assert outcome.method is SearchMethod.AI_FALLBACK
        assert outcome.fallback_reason is FallbackReason.NO_RESULTS
        assert outcome.direct_error is None
        assert [a.url for a in outcome.articles] == ["https://ai"]
        assert outcome.sources == (SOURCE,)
        assert outcome.states == (
            SearchState.IDLE,
            SearchState.TRYING_DIRECT,
            SearchState.TRYING_AI_FALLBACK,
            SearchState.DONE,
        )
        assert outcome.usage.google_requests == 1
        assert outcome.usage.input_tokens == 10

    async def test_direct_error_falls_back(self, params: SearchParameters) -> None:
        direct = _searcher(error=ProviderError("Google Search API error: 500", provider="google"))
        fallback = _searcher([_article("https://ai")])
        pipeline = FallbackPipeline(direct, fallback)

        outcome = await pipeline.run(params)

        assert outcome.method is SearchMethod.AI_FALLBACK
        assert outcome.fallback_reason is FallbackReason.DIRECT_ERROR
        assert outcome.direct_error == "Google Search API error: 500"
        fallback.search.assert_awaited_once_with(params)

    async def test_fallback_error_fails_search(self, params: SearchParameters) -> None:
        direct = _searcher()
        fallback = _searcher(error=ProviderError("quota exceeded", provider="claude"))
        pipeline = FallbackPipeline(direct, fallback)

        with pytest.raises(SearchFailedError, match="Search failed: quota exceeded"):
            await pipeline.run(params)

    async def test_no_results_anywhere(self, params: SearchParameters) -> None:
        pipeline = FallbackPipeline(_searcher(), _searcher())

        outcome = await pipeline.run(params)

        assert outcome.no_results
        assert outcome.method is SearchMethod.AI_FALLBACK
        assert outcome.states[-1] is SearchState.DONE

    async def test_sources_alone_are_a_result(self, params: SearchParameters) -> None:
        pipeline = FallbackPipeline(_searcher(), _searcher(sources=[SOURCE]))
        outcome = await pipeline.run(params)
        assert not outcome.no_results
        assert outcome.articles == ()

    async def test_without_fallback_empty_is_done(self, params: SearchParameters) -> None:
        pipeline = FallbackPipeline(_searcher())

        outcome = await pipeline.run(params)

        assert outcome.no_results
        assert outcome.method is SearchMethod.DIRECT
        assert outcome.fallback_reason is FallbackReason.NO_RESULTS
        assert SearchState.TRYING_AI_FALLBACK not in outcome.states

    async def test_without_fallback_error_fails(self, params: SearchParameters) -> None:
        pipeline = FallbackPipeline(_searcher(error=ProviderError("boom", provider="google")))

        with pytest.raises(SearchFailedError, match="boom"):
            await pipeline.run(params)

    async def test_fallback_articles_trusted_by_default(self, params: SearchParameters) -> None:
        unverified = _article("https://ai", day="sometime", snippet="no mention")
        pipeline = FallbackPipeline(_searcher(), _searcher([unverified]))

        outcome = await pipeline.run(params)

        assert outcome.articles == (unverified,)

    async def test_verify_fallback_filters_articles(self, params: SearchParameters) -> None:
        good = _article("https://good")
        bad_date = _article("https://old", day="2019-05-05")
        no_match = _article(
            "https://nomatch", snippet="Acmeville is nice", headline="Local fair"
        )
        pipeline = FallbackPipeline(
            _searcher(), _searcher([good, bad_date, no_match]), verify_fallback=True
        )

        outcome = await pipeline.run(params)

        assert [a.url for a in outcome.articles] == ["https://good"]

    async def test_run_logger_records_stages(
        self, params: SearchParameters, tmp_path: Path
    ) -> None:
        run_logger = RunLogger(tmp_path)
        pipeline = FallbackPipeline(
            _searcher(error=ProviderError("boom", provider="google")),
            _searcher([_article("https://ai")]),
            verify_fallback=True,
            run_logger=run_logger,
        )

        await pipeline.run(params)

        assert run_logger.last_log_path is not None
        data = json.loads(run_logger.last_log_path.read_text())
        assert data["pipeline_type"] == "fallback"
        assert data["params"]["trademark"] == "Acme"
        assert [s["stage"] for s in data["stages"]] == [
            "direct_search",
            "ai_fallback",
            "fallback_verification",
        ]
        assert data["stages"][0]["error"] == "boom"
        assert data["method"] == "ai_fallback"
        assert data["fallback_reason"] == "direct_error"
        assert data["final_article_count"] == 1


def test_verify_articles_accepts_free_text_dates_that_parse(params: SearchParameters) -> None:
    article = _article("https://x", day="March 5, 2021")
    assert verify_articles([article], params) == [article]


def test_verify_articles_drops_unparseable_dates(params: SearchParameters) -> None:
    assert verify_articles([_article("https://x", day="last spring")], params) == []


async def test_failed_search_is_logged(params: SearchParameters, tmp_path: Path) -> None:
    run_logger = RunLogger(tmp_path)
    pipeline = FallbackPipeline(
        _searcher(),
        _searcher(error=ProviderError("quota exceeded", provider="claude")),
        run_logger=run_logger,
    )

    with pytest.raises(SearchFailedError):
        await pipeline.run(params)

    assert run_logger.last_log_path is not None
    data = json.loads(run_logger.last_log_path.read_text())
    assert data["error"] == "Search failed: quota exceeded"
    assert data["stages"][-1]["error"] == "quota exceeded"
