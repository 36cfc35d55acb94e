"""Usage snapshot and derived metrics models."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator
from pydantic.alias_generators import to_camel

HourOfDay = Annotated[int, Field(ge=0, le=23)]

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    protected_namespaces=(),
)


def _none_to_zero(value: object) -> object:
    return 0 if value is None else value


class TokenCounts(BaseModel):
    """Per-model token counters as recorded in the stats cache."""

    model_config = _WIRE_CONFIG

    input_tokens: NonNegativeInt = 0
    output_tokens: NonNegativeInt = 0
    cache_read_input_tokens: NonNegativeInt = 0
    cache_creation_input_tokens: NonNegativeInt = 0

    @field_validator("*", mode="before")
    @classmethod
    def _zero_when_null(cls, value: object) -> object:
        return _none_to_zero(value)

    @property
    def total(self) -> int:
        return (
            self.input_tokens
            + self.output_tokens
            + self.cache_read_input_tokens
            + self.cache_creation_input_tokens
        )


class DayRecord(BaseModel):
    """Activity for one calendar day."""

    model_config = _WIRE_CONFIG

    date: str
    message_count: NonNegativeInt = 0
    session_count: NonNegativeInt = 0
    tool_call_count: NonNegativeInt = 0

    @field_validator("message_count", "session_count", "tool_call_count", mode="before")
    @classmethod
    def _zero_when_null(cls, value: object) -> object:
        return _none_to_zero(value)


# Stands in for the peak day when there is no daily activity at all.
EMPTY_DAY = DayRecord(date="N/A")


class UsageSnapshot(BaseModel):
    """A full point-in-time capture of the stats cache."""

    model_config = _WIRE_CONFIG

    model_usage: dict[str, TokenCounts] = Field(default_factory=dict)
    daily_activity: list[DayRecord] = Field(default_factory=list)
    hour_counts: dict[HourOfDay, NonNegativeInt] = Field(default_factory=dict)
    total_sessions: NonNegativeInt | None = None
    total_messages: NonNegativeInt | None = None
    first_session_date: str | None = None
    last_computed_date: str | None = None

    @field_validator("model_usage", "hour_counts", mode="before")
    @classmethod
    def _empty_mapping_when_null(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("daily_activity", mode="before")
    @classmethod
    def _empty_list_when_null(cls, value: object) -> object:
        return [] if value is None else value


class TokenTotals(BaseModel):
    """Grand totals per token category across all models."""

    model_config = ConfigDict(frozen=True)

    input: int = 0
    output: int = 0
    cache_read: int = 0
    cache_creation: int = 0

    @property
    def total(self) -> int:
        return self.input + self.output + self.cache_read + self.cache_creation


class ModelAggregate(BaseModel):
    """Per-model totals, ranked by ``total``."""

    model_config = ConfigDict(frozen=True)

    id: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_input_tokens: int = 0
    cache_creation_input_tokens: int = 0
    total: int = 0


class DerivedMetrics(BaseModel):
    """Everything computed from one snapshot; the input to export and display."""

    model_config = ConfigDict(frozen=True)

    total_input: int = 0
    total_output: int = 0
    total_cache_read: int = 0
    total_cache_create: int = 0
    total_tokens: int = 0
    cost_estimate: float = 0.0
    total_messages: int = 0
    total_sessions: int = 0
    total_tool_calls: int = 0
    day_count: int = 0
    avg_messages_per_day: int = 0
    models: list[ModelAggregate] = Field(default_factory=list)
    peak_day: DayRecord = EMPTY_DAY
    top_days: list[DayRecord] = Field(default_factory=list)
    daily: list[DayRecord] = Field(default_factory=list)
    hour_counts: dict[int, int] = Field(default_factory=dict)
    max_daily_messages: int = 1
    max_hour_count: int = 1
    first_session_date: str | None = None
    last_computed_date: str | None = None
