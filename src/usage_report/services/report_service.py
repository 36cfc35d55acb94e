"""Report service: snapshot loading, metric derivation and prompt collection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from usage_report.data.discovery import load_all_sessions
from usage_report.data.stats import load_snapshot
from usage_report.models.sessions import PromptRecord, SessionEntry
from usage_report.models.usage import DerivedMetrics
from usage_report.services.aggregation import build_metrics
from usage_report.services.prompts import extract_prompts

if TYPE_CHECKING:
    from usage_report.config import Config

logger = logging.getLogger(__name__)


class ReportService:
    """Service for computing report contents from the Claude data directory."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def compute_metrics(self) -> Result[DerivedMetrics, str]:
        """Load the stats cache and derive all metrics from it."""
        snapshot = load_snapshot(self._config.stats_cache_path)
        if isinstance(snapshot, Err):
            return snapshot
        metrics = build_metrics(
            snapshot.ok_value,
            rates=self._config.rates,
            pricing_mode=self._config.pricing_mode,
        )
        logger.debug(
            "Derived metrics for %d models over %d days", len(metrics.models), metrics.day_count
        )
        return Ok(metrics)

    def collect_prompts(self) -> tuple[list[SessionEntry], list[PromptRecord]]:
        """Discover all indexed sessions and extract their opening prompts."""
        sessions = load_all_sessions(self._config)
        prompts = extract_prompts(sessions)
        logger.info("Extracted %d prompts from %d sessions", len(prompts), len(sessions))
        return sessions, prompts
