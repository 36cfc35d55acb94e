"""Typer CLI for the usage report: generate and summary commands."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from result import Err

from usage_report.config import Config
from usage_report.models.usage import DerivedMetrics
from usage_report.services.aggregation import hour_distribution, hour_fractions
from usage_report.services.container import ServiceContainer
from usage_report.services.formatting import (
    bar_percent,
    fmt_count,
    fmt_money,
    fmt_tokens,
    model_short_name,
    pct,
    round_half_up,
)

app = typer.Typer(
    name="usage-report",
    help="Claude usage report: aggregate local usage stats into data.json and prompts.json.",
    invoke_without_command=True,
)

_HISTOGRAM_WIDTH = 30


class PricingChoice(str, Enum):
    flat = "flat"
    per_model = "per-model"


ClaudeDirOption = Annotated[
    Path | None,
    typer.Option("--claude-dir", help="Path to Claude data directory"),
]
PricingOption = Annotated[
    PricingChoice,
    typer.Option("--pricing", help="One flat rate table, or per-model family rates"),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_config(
    claude_dir: Path | None, pricing: PricingChoice, out_dir: Path | None = None
) -> Config:
    return Config(
        claude_dir=claude_dir or Path.home() / ".claude",
        out_dir=out_dir or Path.cwd(),
        pricing_mode=pricing.value,
    )


@app.callback(invoke_without_command=True)
def generate(
    ctx: typer.Context,
    claude_dir: ClaudeDirOption = None,
    out_dir: Annotated[
        Path | None,
        typer.Option("--out-dir", help="Directory to write data.json and prompts.json into"),
    ] = None,
    pricing: PricingOption = PricingChoice.flat,
    verbose: VerboseOption = False,
) -> None:
    """Write data.json and prompts.json for the Claude data directory."""
    if ctx.invoked_subcommand is not None:
        return
    _configure_logging(verbose)
    config = _build_config(claude_dir, pricing, out_dir)
    services = ServiceContainer.create(config)

    typer.echo(f"Loading {config.stats_cache_path}...")
    metrics = services.report_service.compute_metrics()
    if isinstance(metrics, Err):
        typer.echo(f"Error: {metrics.err_value}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Loading session indexes from {config.projects_dir}...")
    sessions, prompts = services.report_service.collect_prompts()
    typer.echo(
        f"  Found {len(sessions)} indexed sessions "
        f"({metrics.ok_value.total_sessions} total), {len(prompts)} prompts"
    )

    for written in (
        services.export_service.export_data_json(metrics.ok_value),
        services.export_service.export_prompts_json(prompts),
    ):
        if isinstance(written, Err):
            typer.echo(f"Error: {written.err_value}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"  Wrote {written.ok_value}")


@app.command()
def summary(
    claude_dir: ClaudeDirOption = None,
    pricing: PricingOption = PricingChoice.flat,
    top: Annotated[int, typer.Option("--top", min=1, help="Number of models to list")] = 8,
    plan_price: Annotated[
        float,
        typer.Option("--plan-price", min=0.0, help="Monthly plan price to compare against"),
    ] = 200.0,
    verbose: VerboseOption = False,
) -> None:
    """Print a text summary of usage to the terminal."""
    _configure_logging(verbose)
    config = _build_config(claude_dir, pricing)
    services = ServiceContainer.create(config)

    metrics = services.report_service.compute_metrics()
    if isinstance(metrics, Err):
        typer.echo(f"Error: {metrics.err_value}", err=True)
        raise typer.Exit(code=1)
    typer.echo("\n".join(render_summary(metrics.ok_value, top=top, plan_price=plan_price)))


def render_summary(metrics: DerivedMetrics, top: int = 8, plan_price: float = 200.0) -> list[str]:
    """Lay out the summary text, one list item per line."""
    first = metrics.first_session_date or "N/A"
    last = metrics.last_computed_date or "N/A"
    lines = [
        f"Claude usage {first} to {last}",
        "",
        f"Total tokens   {fmt_tokens(metrics.total_tokens)}",
        f"Messages       {fmt_count(metrics.total_messages)}"
        f" (~{metrics.avg_messages_per_day}/day)",
        f"Sessions       {fmt_count(metrics.total_sessions)}",
        f"Tool calls     {fmt_count(metrics.total_tool_calls)}",
        f"API estimate   {fmt_money(metrics.cost_estimate)} (if paid per-token)",
    ]
    if plan_price:
        multiplier = fmt_count(round_half_up(metrics.cost_estimate / plan_price))
        lines.append(f"Value          {multiplier}x a {fmt_money(plan_price)} plan")

    lines += ["", "Token breakdown"]
    for label, value in (
        ("Input", metrics.total_input),
        ("Output", metrics.total_output),
        ("Cache read", metrics.total_cache_read),
        ("Cache creation", metrics.total_cache_create),
    ):
        lines.append(f"  {label:<15}{fmt_tokens(value):>9}  {pct(value, metrics.total_tokens)}%")

    lines += ["", "Models"]
    for model in metrics.models[:top]:
        share = pct(model.total, metrics.total_tokens)
        lines.append(f"  {model_short_name(model.id):<24}{fmt_tokens(model.total):>9}  {share}%")

    lines += ["", "Top days"]
    for rank, day in enumerate(metrics.top_days, start=1):
        lines.append(f"  {rank}. {day.date}  {fmt_count(day.message_count)} msgs")

    lines += ["", "Activity by hour"]
    counts = hour_distribution(metrics.hour_counts)
    for hour, (count, fraction) in enumerate(zip(counts, hour_fractions(metrics), strict=True)):
        cells = round_half_up(bar_percent(fraction) / 100 * _HISTOGRAM_WIDTH)
        lines.append(f"  {hour:02d} {'#' * cells:<{_HISTOGRAM_WIDTH}} {fmt_count(count)}")
    return lines
