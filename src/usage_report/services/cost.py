"""Rate tables and cost estimation."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, NonNegativeFloat

from usage_report.models.usage import ModelAggregate, TokenTotals

_PER_MILLION = 1_000_000


class RateTable(BaseModel):
    """Prices in currency per million tokens, one per token category."""

    model_config = ConfigDict(frozen=True)

    input: NonNegativeFloat
    output: NonNegativeFloat
    cache_read: NonNegativeFloat
    cache_creation: NonNegativeFloat


# Flat benchmark applied to the combined totals of every model (USD per million tokens).
DEFAULT_RATES = RateTable(input=5.0, output=25.0, cache_read=0.5, cache_creation=6.25)

# Per-family prices used only in per-model pricing mode, matched by id prefix.
MODEL_PRICING: dict[str, RateTable] = {
    "claude-opus-4-6": RateTable(input=5.0, output=25.0, cache_read=0.5, cache_creation=6.25),
    "claude-opus-4-5": RateTable(input=5.0, output=25.0, cache_read=0.5, cache_creation=6.25),
    "claude-opus-4": RateTable(input=15.0, output=75.0, cache_read=1.5, cache_creation=18.75),
    "claude-sonnet-4": RateTable(input=3.0, output=15.0, cache_read=0.3, cache_creation=3.75),
    "claude-haiku-4-5": RateTable(input=1.0, output=5.0, cache_read=0.1, cache_creation=1.25),
    "claude-3-5-haiku": RateTable(input=0.8, output=4.0, cache_read=0.08, cache_creation=1.0),
}


def get_pricing(model: str, default: RateTable = DEFAULT_RATES) -> RateTable:
    """Get the rate table for a model id, falling back to ``default``.

    The longest matching prefix wins, so ``claude-opus-4-6`` beats ``claude-opus-4``.
    """
    best = ""
    for prefix in MODEL_PRICING:
        if model.startswith(prefix) and len(prefix) > len(best):
            best = prefix
    return MODEL_PRICING[best] if best else default


def estimate_cost(totals: TokenTotals, rates: RateTable = DEFAULT_RATES) -> float:
    """Estimate the cost of ``totals`` under a single rate table.

    No rounding is applied; that is left to presentation.
    """
    return (
        totals.input * rates.input
        + totals.output * rates.output
        + totals.cache_read * rates.cache_read
        + totals.cache_creation * rates.cache_creation
    ) / _PER_MILLION


def estimate_model_costs(
    models: Iterable[ModelAggregate], default: RateTable = DEFAULT_RATES
) -> float:
    """Sum of each model's cost priced at its own family rates."""
    cost = 0.0
    for model in models:
        totals = TokenTotals(
            input=model.input_tokens,
            output=model.output_tokens,
            cache_read=model.cache_read_input_tokens,
            cache_creation=model.cache_creation_input_tokens,
        )
        cost += estimate_cost(totals, get_pricing(model.id, default))
    return cost
