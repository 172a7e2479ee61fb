#!/usr/bin/env python
"""CLI for finding proof-of-use articles for a trademark."""

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from trademark_evidence.config import create_from_config, get_default_config_path, load_config
from trademark_evidence.data import (
    ALL_COUNTRIES,
    COUNTRY_OPTIONS,
    DEFAULT_LANGUAGE,
    LANGUAGE_OPTIONS,
    OTHER_COUNTRY,
    SearchParameters,
)
from trademark_evidence.errors import ConfigurationError, SearchFailedError
from trademark_evidence.pipeline import NO_RESULTS_MESSAGE, SearchMethod, SearchOutcome
from trademark_evidence.presentation import (
    average_relevance,
    describe_relevance,
    group_by_year,
    relevance_distribution,
)

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    trademark: str
    start: date
    end: date
    language: str = DEFAULT_LANGUAGE
    country: str = ALL_COUNTRIES
    config: Path
    log: bool = False
    log_dir: str = "logs"

    @field_validator("trademark")
    @classmethod
    def trademark_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Trademark must not be empty")
        return v.strip()

    @field_validator("language")
    @classmethod
    def language_supported(cls, v: str) -> str:
        if v not in LANGUAGE_OPTIONS:
            raise ValueError(f"Language must be one of: {', '.join(LANGUAGE_OPTIONS)}")
        return v

    @field_validator("country")
    @classmethod
    def country_is_specific(cls, v: str) -> str:
        v = v.strip()
        if not v or v == OTHER_COUNTRY:
            raise ValueError("Give a country code or the name of the country")
        return v

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v

    @model_validator(mode="after")
    def range_is_ordered(self) -> "CLIArgs":
        if self.start > self.end:
            raise ValueError(f"Start date {self.start} is after end date {self.end}")
        return self

    def to_params(self) -> SearchParameters:
        return SearchParameters(
            trademark=self.trademark,
            start_date=self.start,
            end_date=self.end,
            language=self.language,
            country=self.country,
        )


def print_outcome(outcome: SearchOutcome) -> None:
    """Print articles grouped by year, then any grounding sources."""
    if outcome.no_results:
        print(f"\n{NO_RESULTS_MESSAGE}")
        print("Try widening the date range or check the trademark spelling.")
        return

    method = "Google Search" if outcome.method is SearchMethod.DIRECT else "AI search"
    print(f"\nFound {len(outcome.articles)} articles via {method}:")
    if outcome.articles:
        distribution = relevance_distribution(outcome.articles)
        counts = ", ".join(f"{stars}* x{n}" for stars, n in distribution.items() if n)
        print(f"Relevance: {counts}")

    for year, articles in group_by_year(outcome.articles).items():
        noun = "article" if len(articles) == 1 else "articles"
        avg = average_relevance(articles)
        print(f"\n=== {year} ({len(articles)} {noun}, avg relevance {avg:.1f})")
        for i, article in enumerate(articles, 1):
            stars = "*" * (article.relevance_score or 0)
            print(f"{i}. {article.headline} {stars}".rstrip())
            date_note = f" [{article.date_source.value}]" if article.date_source else ""
            print(f"   Date: {article.date}{date_note}")
            if article.relevance_details:
                print(f"   Relevance: {describe_relevance(article.relevance_details)}")
            print(f"   URL: {article.url}")
            if article.source_code_link:
                print(f"   Source: {article.source_code_link}")
            print(f"   {article.snippet}")

    if outcome.sources:
        print("\nSources consulted:")
        for source in outcome.sources:
            print(f"- {source.title}: {source.uri}")


async def run(args: CLIArgs) -> None:
    """Execute the search with the given configuration.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    pipeline, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    params = args.to_params()

    logger.info(f"Searching for: {params.trademark} ({params.start_date} to {params.end_date})")
    logger.info(f"Config: {args.config}")

    outcome = await pipeline.run(params)
    print_outcome(outcome)

    usage = outcome.usage
    logger.info("\n--- Usage Summary ---")
    logger.info(f"Google requests: {usage.google_requests}")
    logger.info(f"Source pages fetched: {usage.source_fetches}")
    if usage.api_calls:
        logger.info(f"Input tokens: {usage.input_tokens:,}")
        logger.info(f"Output tokens: {usage.output_tokens:,}")
        logger.info(f"Web searches: {usage.web_searches}")

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Find published articles evidencing use of a trademark."
    )
    parser.add_argument("trademark", help="Trademark to search for (matched verbatim)")
    parser.add_argument("--start", required=True, help="Start of the date range (YYYY-MM-DD)")
    parser.add_argument("--end", required=True, help="End of the date range (YYYY-MM-DD)")
    parser.add_argument(
        "--language",
        "-l",
        default=DEFAULT_LANGUAGE,
        choices=sorted(LANGUAGE_OPTIONS),
        help="Article language (default: en)",
    )
    parser.add_argument(
        "--country",
        default=ALL_COUNTRIES,
        help=(
            f"Country code ({', '.join(c for c in COUNTRY_OPTIONS if c != OTHER_COUNTRY)}) "
            "or any other country name (default: ALL)"
        ),
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable intermediate pipeline logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            trademark=ns.trademark,
            start=ns.start,
            end=ns.end,
            language=ns.language,
            country=ns.country,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except ValidationError as e:
        for error in e.errors():
            logger.error(error["msg"])
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except (ConfigurationError, SearchFailedError) as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
