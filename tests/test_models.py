"""Tests for data models."""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from trademark_evidence.data import (
    APICallUsage,
    ArticleResult,
    DateResolution,
    DateSource,
    SearchItem,
    SearchParameters,
    Usage,
)


def test_search_parameters_defaults() -> None:
    params = SearchParameters(
        trademark="Acme", start_date=date(2021, 1, 1), end_date=date(2021, 12, 31)
    )
    assert params.language == "en"
    assert params.country == "ALL"


def test_search_parameters_rejects_empty_trademark() -> None:
    with pytest.raises(ValueError, match="Trademark"):
        SearchParameters(trademark="  ", start_date=date(2021, 1, 1), end_date=date(2021, 1, 2))


def test_search_parameters_rejects_reversed_range() -> None:
    with pytest.raises(ValueError, match="after end date"):
        SearchParameters(trademark="Acme", start_date=date(2022, 1, 1), end_date=date(2021, 1, 1))


def test_search_parameters_rejects_unknown_language() -> None:
    with pytest.raises(ValueError, match="language"):
        SearchParameters(
            trademark="Acme",
            start_date=date(2021, 1, 1),
            end_date=date(2021, 1, 2),
            language="xx",
        )


def test_search_parameters_accepts_custom_country() -> None:
    params = SearchParameters(
        trademark="Acme",
        start_date=date(2021, 1, 1),
        end_date=date(2021, 1, 2),
        country="New Zealand",
    )
    assert params.country == "New Zealand"


def test_search_parameters_requires_name_for_other_country() -> None:
    with pytest.raises(ValueError, match="country"):
        SearchParameters(
            trademark="Acme",
            start_date=date(2021, 1, 1),
            end_date=date(2021, 1, 2),
            country="ELSEWHERE",
        )


def test_search_parameters_contains_is_inclusive() -> None:
    params = SearchParameters(
        trademark="Acme", start_date=date(2021, 1, 1), end_date=date(2021, 1, 31)
    )
    assert params.contains(date(2021, 1, 1))
    assert params.contains(date(2021, 1, 31))
    assert not params.contains(date(2020, 12, 31))
    assert not params.contains(date(2021, 2, 1))


def test_search_parameters_is_frozen() -> None:
    params = SearchParameters(
        trademark="Acme", start_date=date(2021, 1, 1), end_date=date(2021, 1, 2)
    )
    with pytest.raises(FrozenInstanceError):
        params.trademark = "Other"  # type: ignore[misc]


def test_article_year() -> None:
    article = ArticleResult(
        headline="h",
        date="2021-03-15",
        snippet="s",
        url="https://example.com",
        language="en",
        country="ALL",
        trademark="Acme",
    )
    assert article.year == "2021"


def test_article_year_for_free_text_date() -> None:
    article = ArticleResult(
        headline="h",
        date="sometime last spring",
        snippet="s",
        url="https://example.com",
        language="en",
        country="ALL",
        trademark="Acme",
    )
    assert article.year is None


def test_search_item_from_api() -> None:
    item = SearchItem.from_api(
        {
            "title": "Acme launches",
            "link": "https://example.com/a",
            "snippet": "Acme today...",
            "pagemap": {"metatags": [{"og:title": "x", "datepublished": "2021-03-15"}]},
        }
    )
    assert item.title == "Acme launches"
    assert item.link == "https://example.com/a"
    assert item.metatags == ({"og:title": "x", "datepublished": "2021-03-15"},)
    assert item.text == "Acme launches Acme today..."


def test_search_item_from_api_without_pagemap() -> None:
    item = SearchItem.from_api({"title": "t", "link": "l"})
    assert item.snippet == ""
    assert item.metatags == ()


def test_date_resolution_found() -> None:
    assert DateResolution(date="2021-01-01", source=DateSource.CONTENT).found
    assert not DateResolution(date="date not found", source=DateSource.NOT_FOUND).found


def test_usage_addition() -> None:
    a = Usage(api_calls=[APICallUsage(model="m", input_tokens=10)], google_requests=2)
    b = Usage(
        api_calls=[APICallUsage(model="m", output_tokens=5, web_searches=1)], source_fetches=3
    )
    total = a + b
    assert total.google_requests == 2
    assert total.source_fetches == 3
    assert total.input_tokens == 10
    assert total.output_tokens == 5
    assert total.web_searches == 1

    a += b
    assert a.source_fetches == 3
    assert len(a.api_calls) == 2
