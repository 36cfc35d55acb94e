"""Pydantic models for the usage report."""

from usage_report.models.sessions import PromptRecord, SessionEntry
from usage_report.models.usage import (
    EMPTY_DAY,
    DayRecord,
    DerivedMetrics,
    ModelAggregate,
    TokenCounts,
    TokenTotals,
    UsageSnapshot,
)

__all__ = [
    "DayRecord",
    "DerivedMetrics",
    "EMPTY_DAY",
    "ModelAggregate",
    "PromptRecord",
    "SessionEntry",
    "TokenCounts",
    "TokenTotals",
    "UsageSnapshot",
]
