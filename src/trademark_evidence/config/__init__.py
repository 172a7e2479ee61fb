"""Configuration module for trademark evidence searches."""

from trademark_evidence.config.factory import create_from_config, create_pipeline, create_searcher
from trademark_evidence.config.loader import get_default_config_path, load_config
from trademark_evidence.config.models import (
    ClaudeSearcherConfig,
    FallbackPipelineConfig,
    GoogleSearcherConfig,
    LoggingConfig,
    SearcherConfig,
    TrademarkEvidenceConfig,
)

__all__ = [
    "ClaudeSearcherConfig",
    "FallbackPipelineConfig",
    "GoogleSearcherConfig",
    "LoggingConfig",
    "SearcherConfig",
    "TrademarkEvidenceConfig",
    "create_from_config",
    "create_pipeline",
    "create_searcher",
    "get_default_config_path",
    "load_config",
]
