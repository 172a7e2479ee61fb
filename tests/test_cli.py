"""Tests for CLI argument validation and output."""

from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from main import CLIArgs, print_outcome
from trademark_evidence.data import (
    ArticleResult,
    ContextRelevance,
    DateSource,
    GroundingChunkWeb,
    RelevanceDetails,
)
from trademark_evidence.pipeline import SearchMethod, SearchOutcome, SearchState


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text("")
    return path


def test_valid_args_build_search_parameters(config_path: Path) -> None:
    args = CLIArgs(
        trademark=" Acme ",
        start="2021-01-01",  # type: ignore[arg-type]
        end="2021-12-31",  # type: ignore[arg-type]
        language="es",
        country="MX",
        config=config_path,
    )
    params = args.to_params()
    assert params.trademark == "Acme"
    assert params.start_date == date(2021, 1, 1)
    assert params.language == "es"
    assert params.country == "MX"


@pytest.mark.parametrize(
    "overrides",
    [
        {"trademark": "   "},
        {"language": "xx"},
        {"country": "ELSEWHERE"},
        {"start": "2022-01-01"},
        {"start": "not-a-date"},
    ],
)
def test_invalid_args_are_rejected(config_path: Path, overrides: dict) -> None:
    values = {
        "trademark": "Acme",
        "start": "2021-01-01",
        "end": "2021-12-31",
        "config": config_path,
        **overrides,
    }
    with pytest.raises(ValidationError):
        CLIArgs(**values)


def test_missing_config_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="Config file not found"):
        CLIArgs(
            trademark="Acme",
            start="2021-01-01",  # type: ignore[arg-type]
            end="2021-12-31",  # type: ignore[arg-type]
            config=tmp_path / "missing.yaml",
        )


def test_print_outcome_groups_by_year(capsys: pytest.CaptureFixture[str]) -> None:
    article = ArticleResult(
        headline="Acme opens store",
        date="2021-03-15",
        snippet="**Acme** opened",
        url="https://example.com/1",
        language="en",
        country="ALL",
        trademark="Acme",
        relevance_score=4,
        date_source=DateSource.SOURCE_CODE,
        relevance_details=RelevanceDetails(
            keyword_frequency=2,
            context_relevance=ContextRelevance.HIGH,
            is_main_content=True,
        ),
        source_code_link="view-source:https://example.com/1",
    )
    outcome = SearchOutcome(
        articles=(article,),
        sources=(GroundingChunkWeb(uri="https://cited", title="Cited"),),
        method=SearchMethod.DIRECT,
        states=(SearchState.IDLE, SearchState.TRYING_DIRECT, SearchState.DONE),
    )

    print_outcome(outcome)

    out = capsys.readouterr().out
    assert "=== 2021 (1 article, avg relevance 4.0)" in out
    assert "Acme opens store ****" in out
    assert "Relevance: 4* x1" in out
    assert "Relevance: 2 mentions, high context, main content" in out
    assert "view-source:https://example.com/1" in out
    assert "Cited: https://cited" in out


def test_print_outcome_without_results(capsys: pytest.CaptureFixture[str]) -> None:
    outcome = SearchOutcome(
        articles=(),
        sources=(),
        method=SearchMethod.AI_FALLBACK,
        states=(SearchState.IDLE, SearchState.DONE),
    )
    print_outcome(outcome)
    assert "No articles found with any search method." in capsys.readouterr().out
