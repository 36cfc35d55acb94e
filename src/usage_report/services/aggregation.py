"""Metric derivation: model totals, cost, peak/top days and hour distribution."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Literal

from usage_report.models.usage import (
    EMPTY_DAY,
    DayRecord,
    DerivedMetrics,
    ModelAggregate,
    TokenCounts,
    TokenTotals,
    UsageSnapshot,
)
from usage_report.services.cost import (
    DEFAULT_RATES,
    RateTable,
    estimate_cost,
    estimate_model_costs,
)
from usage_report.services.formatting import round_half_up

TOP_DAYS_LIMIT = 5
HOURS_PER_DAY = 24


def aggregate_models(model_usage: Mapping[str, TokenCounts]) -> list[ModelAggregate]:
    """Build one aggregate per model, largest total first.

    ``sorted`` is stable, so models with equal totals keep their input order.
    Zero-total models are kept.
    """
    models = [
        ModelAggregate(
            id=model_id,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            cache_read_input_tokens=usage.cache_read_input_tokens,
            cache_creation_input_tokens=usage.cache_creation_input_tokens,
            total=usage.total,
        )
        for model_id, usage in model_usage.items()
    ]
    return sorted(models, key=lambda m: m.total, reverse=True)


def token_totals(models: Sequence[ModelAggregate]) -> TokenTotals:
    """Sum each token category across all models."""
    return TokenTotals(
        input=sum(m.input_tokens for m in models),
        output=sum(m.output_tokens for m in models),
        cache_read=sum(m.cache_read_input_tokens for m in models),
        cache_creation=sum(m.cache_creation_input_tokens for m in models),
    )


def find_peak_day(days: Sequence[DayRecord]) -> DayRecord:
    """Return the day with the most messages; the earliest one wins a tie."""
    peak = days[0] if days else EMPTY_DAY
    for day in days:
        if day.message_count > peak.message_count:
            peak = day
    return peak


def top_days(days: Sequence[DayRecord], limit: int = TOP_DAYS_LIMIT) -> list[DayRecord]:
    """Return up to ``limit`` busiest days, ties kept in chronological order."""
    return sorted(days, key=lambda d: d.message_count, reverse=True)[:limit]


def max_daily_messages(days: Sequence[DayRecord]) -> int:
    """Largest daily message count, never below 1."""
    return max(max((d.message_count for d in days), default=0), 1)


def hour_distribution(hour_counts: Mapping[int, int]) -> list[int]:
    """Message counts for hours 0..23; missing hours count as 0."""
    return [hour_counts.get(hour, 0) for hour in range(HOURS_PER_DAY)]


def max_hour_count(hour_counts: Mapping[int, int]) -> int:
    """Largest hourly count, never below 1."""
    return max(max(hour_counts.values(), default=0), 1)


def bar_fractions(values: Sequence[int], denominator: int) -> list[float]:
    """Scale values into 0..1 against ``denominator`` (already floored at 1)."""
    return [value / denominator for value in values]


def daily_fractions(metrics: DerivedMetrics) -> list[float]:
    return bar_fractions([d.message_count for d in metrics.daily], metrics.max_daily_messages)


def hour_fractions(metrics: DerivedMetrics) -> list[float]:
    return bar_fractions(hour_distribution(metrics.hour_counts), metrics.max_hour_count)


def build_metrics(
    snapshot: UsageSnapshot,
    rates: RateTable = DEFAULT_RATES,
    pricing_mode: Literal["flat", "per-model"] = "flat",
) -> DerivedMetrics:
    """Derive every report metric from a validated snapshot.

    In ``flat`` mode one rate table prices the combined totals of all models.
    ``per-model`` prices each model at its family's rates, falling back to
    ``rates`` for unknown ids, and sums the results.
    """
    models = aggregate_models(snapshot.model_usage)
    totals = token_totals(models)
    if pricing_mode == "per-model":
        cost = estimate_model_costs(models, default=rates)
    else:
        cost = estimate_cost(totals, rates)

    daily = list(snapshot.daily_activity)
    # Stored lifetime counters win unless they are missing or zero.
    total_messages = snapshot.total_messages or sum(d.message_count for d in daily)
    total_sessions = snapshot.total_sessions or sum(d.session_count for d in daily)
    day_count = len(daily)

    return DerivedMetrics(
        total_input=totals.input,
        total_output=totals.output,
        total_cache_read=totals.cache_read,
        total_cache_create=totals.cache_creation,
        total_tokens=sum(m.total for m in models),
        cost_estimate=cost,
        total_messages=total_messages,
        total_sessions=total_sessions,
        total_tool_calls=sum(d.tool_call_count for d in daily),
        day_count=day_count,
        avg_messages_per_day=round_half_up(total_messages / day_count) if day_count else 0,
        models=models,
        peak_day=find_peak_day(daily),
        top_days=top_days(daily),
        daily=daily,
        hour_counts=dict(snapshot.hour_counts),
        max_daily_messages=max_daily_messages(daily),
        max_hour_count=max_hour_count(snapshot.hour_counts),
        first_session_date=snapshot.first_session_date,
        last_computed_date=snapshot.last_computed_date,
    )
