"""Export service for data.json and prompts.json."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from usage_report.models.sessions import PromptRecord
from usage_report.models.usage import DayRecord, DerivedMetrics

if TYPE_CHECKING:
    from usage_report.config import Config

logger = logging.getLogger(__name__)


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _day(day: DayRecord) -> dict[str, object]:
    return day.model_dump(by_alias=True)


def metrics_payload(metrics: DerivedMetrics, generated: datetime) -> dict[str, object]:
    """Build the data.json document.

    Key names, including the shortened per-model ``cacheRead``/``cacheCreate``,
    are consumed by other tooling and must not change.
    """
    return {
        "generated": iso_timestamp(generated),
        "totalTokens": metrics.total_tokens,
        "totalInput": metrics.total_input,
        "totalOutput": metrics.total_output,
        "totalCacheRead": metrics.total_cache_read,
        "totalCacheCreate": metrics.total_cache_create,
        "costEstimate": metrics.cost_estimate,
        "totalMessages": metrics.total_messages,
        "totalSessions": metrics.total_sessions,
        "totalToolCalls": metrics.total_tool_calls,
        "dayCount": metrics.day_count,
        "avgMessagesPerDay": metrics.avg_messages_per_day,
        "models": [
            {
                "id": m.id,
                "total": m.total,
                "input": m.input_tokens,
                "output": m.output_tokens,
                "cacheRead": m.cache_read_input_tokens,
                "cacheCreate": m.cache_creation_input_tokens,
            }
            for m in metrics.models
        ],
        "daily": [_day(d) for d in metrics.daily],
        "hourCounts": {str(hour): count for hour, count in metrics.hour_counts.items()},
        "peakDay": _day(metrics.peak_day),
        "topDays": [_day(d) for d in metrics.top_days],
    }


def prompts_payload(prompts: Sequence[PromptRecord]) -> list[dict[str, object]]:
    return [p.model_dump() for p in prompts]


class ExportService:
    """Writes report artifacts into the configured output directory."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def export_data_json(
        self, metrics: DerivedMetrics, generated: datetime | None = None
    ) -> Result[Path, str]:
        """Write data.json and return its path."""
        payload = metrics_payload(metrics, generated or datetime.now(tz=UTC))
        return self._write_json(self._config.data_json_path, payload)

    def export_prompts_json(self, prompts: Sequence[PromptRecord]) -> Result[Path, str]:
        """Write prompts.json and return its path."""
        return self._write_json(self._config.prompts_json_path, prompts_payload(prompts))

    def _write_json(self, path: Path, payload: object) -> Result[Path, str]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to write %s: %s", path, exc)
            return Err(f"Failed to write {path}: {exc}")
        logger.info("Wrote %s", path)
        return Ok(path)
