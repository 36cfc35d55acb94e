"""Configuration for the usage report."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from usage_report.services.cost import DEFAULT_RATES, RateTable

PricingMode = Literal["flat", "per-model"]


@dataclass(frozen=True)
class Config:
    """Report configuration."""

    claude_dir: Path = field(default_factory=lambda: Path.home() / ".claude")
    out_dir: Path = field(default_factory=Path.cwd)
    pricing_mode: PricingMode = "flat"
    rates: RateTable = DEFAULT_RATES

    @property
    def projects_dir(self) -> Path:
        return self.claude_dir / "projects"

    @property
    def stats_cache_path(self) -> Path:
        return self.claude_dir / "stats-cache.json"

    @property
    def data_json_path(self) -> Path:
        return self.out_dir / "data.json"

    @property
    def prompts_json_path(self) -> Path:
        return self.out_dir / "prompts.json"
