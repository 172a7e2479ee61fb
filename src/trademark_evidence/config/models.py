"""Pydantic configuration models for trademark evidence components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

# ============================================================
# Searcher Configs
# ============================================================


class GoogleSearcherConfig(BaseModel):
    """Configuration for GoogleSearcher."""

    type: Literal["google"] = "google"
    max_pages: int = Field(default=10, ge=1, le=10)
    page_size: int = Field(default=10, ge=1, le=10)
    page_delay_seconds: float = Field(default=0.5, ge=0.0)
    inspect_source: bool = True
    timeout_seconds: float = Field(default=30.0, gt=0.0)

    model_config = {"frozen": True}


class ClaudeSearcherConfig(BaseModel):
    """Configuration for ClaudeSearcher."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    max_searches: int = Field(default=5, ge=1)
    max_tokens: int = Field(default=4096, ge=256)

    model_config = {"frozen": True}


SearcherConfig = Annotated[
    GoogleSearcherConfig | ClaudeSearcherConfig,
    Field(discriminator="type"),
]


# ============================================================
# Pipeline Config
# ============================================================


class FallbackPipelineConfig(BaseModel):
    """Configuration for the direct-then-AI fallback pipeline."""

    direct: SearcherConfig = Field(default_factory=GoogleSearcherConfig)
    fallback: SearcherConfig | None = Field(default_factory=ClaudeSearcherConfig)
    verify_fallback: bool = False

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for intermediate pipeline logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class TrademarkEvidenceConfig(BaseModel):
    """Root configuration."""

    pipeline: FallbackPipelineConfig = Field(default_factory=FallbackPipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
