"""Per-search JSON run records.

One file is written per search. It holds the search parameters, one record
per attempted stage (``direct_search``, ``ai_fallback``,
``fallback_verification``) and the terminal method, article count and usage.
"""

import dataclasses
import re
import uuid
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from trademark_evidence.data import Usage

_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


class StageRecord(BaseModel):
    """One attempted stage of a search."""

    stage: str
    component: str
    input: Any = None
    output: Any = None
    result_count: int | None = None
    usage: dict[str, Any] | None = None
    error: str | None = None
    timestamp: str = ""
    duration_seconds: float = 0.0


class RunRecord(BaseModel):
    """A complete search run."""

    run_id: str
    pipeline_type: str
    trademark: str
    params: dict[str, Any]
    started_at: str
    completed_at: str | None = None
    stages: list[StageRecord] = []
    method: str | None = None
    fallback_reason: str | None = None
    error: str | None = None
    final_article_count: int = 0
    total_usage: dict[str, Any] | None = None


def usage_summary(usage: Usage) -> dict[str, Any]:
    """Raw API calls plus the totals a reader usually wants."""
    return {
        "api_calls": [dataclasses.asdict(c) for c in usage.api_calls],
        "google_requests": usage.google_requests,
        "source_fetches": usage.source_fetches,
        "input_tokens": usage.input_tokens,
        "output_tokens": usage.output_tokens,
        "web_searches": usage.web_searches,
    }


def _serialize(obj: Any) -> Any:
    """Convert search values (dataclasses, dates, enums, models) to JSON data."""
    if isinstance(obj, Usage):
        return usage_summary(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _serialize(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


def _slug(text: str) -> str:
    return _SLUG_CHARS.sub("-", text.lower()).strip("-")[:40] or "search"


class RunLogger:
    """Collects stage records for one search at a time and writes them as JSON.

    A disabled logger ignores every call.

    Args:
        log_dir: Directory for run files; created on first write.
        enabled: Whether to record anything.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._record: RunRecord | None = None
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path of the most recently written run file."""
        return self._last_log_path

    def start_run(self, pipeline_type: str, params: Any) -> None:
        """Begin recording a search for ``params``."""
        if not self._enabled:
            return

        serialized = _serialize(params)
        self._record = RunRecord(
            run_id=str(uuid.uuid4()),
            pipeline_type=pipeline_type,
            trademark=str(getattr(params, "trademark", "")),
            params=serialized if isinstance(serialized, dict) else {"value": serialized},
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_stage(
        self,
        stage: str,
        component: str,
        input_data: Any,
        output_data: Any,
        usage: Usage | None,
        duration_seconds: float,
        *,
        error: str | None = None,
    ) -> None:
        """Record one stage of the current search.

        Args:
            stage: "direct_search", "ai_fallback" or "fallback_verification".
            component: Class or function that ran the stage.
            input_data: What the stage was given.
            output_data: What it produced; None when it raised.
            usage: Provider usage of the stage, if any.
            duration_seconds: Wall-clock time spent.
            error: Message of the exception the stage raised.
        """
        if not self._enabled or self._record is None:
            return

        self._record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                input=_serialize(input_data),
                output=_serialize(output_data),
                result_count=len(output_data) if isinstance(output_data, list) else None,
                usage=usage_summary(usage) if usage is not None else None,
                error=error,
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_run(
        self,
        articles: list[Any],
        usage: Usage | None,
        *,
        method: str | None = None,
        fallback_reason: str | None = None,
        error: str | None = None,
    ) -> Path | None:
        """Close the current search and write it to ``run_<timestamp>_<trademark>.json``.

        Args:
            articles: Articles in the terminal outcome.
            usage: Usage accumulated over all stages.
            method: Path that produced the outcome ("direct" or "ai_fallback").
            fallback_reason: Why the fallback ran, if it did.
            error: Message of the terminal failure, if the search failed.

        Returns:
            Path of the written file, or None when disabled or no run started.
        """
        if not self._enabled or self._record is None:
            return None

        record = self._record
        record.completed_at = datetime.now(tz=UTC).isoformat()
        record.method = method
        record.fallback_reason = fallback_reason
        record.error = error
        record.final_article_count = len(articles)
        record.total_usage = usage_summary(usage) if usage is not None else None

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # 2026-02-12T14:30:00.123+00:00 -> 2026-02-12T14-30-00
        ts = record.started_at.split(".")[0].split("+")[0].replace(":", "-")
        filepath = self._log_dir / f"run_{ts}_{_slug(record.trademark)}.json"

        filepath.write_text(record.model_dump_json(indent=2))
        self._last_log_path = filepath
        self._record = None
        return filepath
