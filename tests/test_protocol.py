"""Tests for protocol compliance."""

from datetime import date

import pytest

from trademark_evidence.data import ArticleResult, GroundingChunkWeb, SearchParameters, Usage
from trademark_evidence.pipeline import FallbackPipeline
from trademark_evidence.search import ClaudeSearcher, GoogleSearcher


def test_google_searcher_matches_protocol() -> None:
    """Verify GoogleSearcher structurally matches the TrademarkSearcher protocol."""
    searcher = GoogleSearcher(api_key="test", cx="test")
    assert hasattr(searcher, "search")
    assert callable(searcher.search)


def test_claude_searcher_matches_protocol(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLAUDE_API_KEY", "test-key")
    searcher = ClaudeSearcher()
    assert callable(searcher.search)


class MockSearcher:
    """A minimal implementation to verify protocol requirements."""

    async def search(
        self, params: SearchParameters
    ) -> tuple[list[ArticleResult], list[GroundingChunkWeb], Usage]:
        return ([], [], Usage())


async def test_mock_searcher_drives_pipeline() -> None:
    """Any class with the right method signature can be plugged into the pipeline."""
    pipeline = FallbackPipeline(MockSearcher(), MockSearcher())
    params = SearchParameters(
        trademark="Acme", start_date=date(2021, 1, 1), end_date=date(2021, 1, 2)
    )
    outcome = await pipeline.run(params)
    assert outcome.no_results
