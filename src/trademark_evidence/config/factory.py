"""Factory functions to create components from configuration."""

from pathlib import Path

from trademark_evidence.config.models import (
    ClaudeSearcherConfig,
    FallbackPipelineConfig,
    GoogleSearcherConfig,
    SearcherConfig,
    TrademarkEvidenceConfig,
)
from trademark_evidence.pipeline.fallback import FallbackPipeline
from trademark_evidence.run_logger import RunLogger
from trademark_evidence.search.base import TrademarkSearcher
from trademark_evidence.search.claude import ClaudeSearcher
from trademark_evidence.search.google import GoogleSearcher


def create_searcher(config: SearcherConfig) -> TrademarkSearcher:
    """Create a searcher from config.

    Raises:
        ConfigurationError: If the searcher's credentials are missing.
    """
    if isinstance(config, GoogleSearcherConfig):
        return GoogleSearcher(
            max_pages=config.max_pages,
            page_size=config.page_size,
            page_delay_seconds=config.page_delay_seconds,
            inspect_source=config.inspect_source,
            timeout_seconds=config.timeout_seconds,
        )
    if isinstance(config, ClaudeSearcherConfig):
        return ClaudeSearcher(
            model=config.model,
            max_searches=config.max_searches,
            max_tokens=config.max_tokens,
        )
    msg = f"Unknown searcher config type: {type(config)}"
    raise ValueError(msg)


def create_pipeline(
    config: FallbackPipelineConfig,
    run_logger: RunLogger | None = None,
) -> FallbackPipeline:
    """Create the fallback pipeline from config."""
    return FallbackPipeline(
        direct=create_searcher(config.direct),
        fallback=create_searcher(config.fallback) if config.fallback is not None else None,
        verify_fallback=config.verify_fallback,
        run_logger=run_logger,
    )


def create_from_config(
    config: TrademarkEvidenceConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[FallbackPipeline, RunLogger | None]:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (pipeline, run_logger). run_logger is None if logging is disabled.

    Raises:
        ConfigurationError: If credentials for a configured searcher are missing.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    pipeline = create_pipeline(config.pipeline, run_logger=run_logger)
    return (pipeline, run_logger)
