"""Service container with DI wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from usage_report.services.export_service import ExportService
from usage_report.services.report_service import ReportService

if TYPE_CHECKING:
    from usage_report.config import Config


@dataclass(frozen=True)
class ServiceContainer:
    """Holds all report services. Built once per run, immutable."""

    report_service: ReportService
    export_service: ExportService

    @classmethod
    def create(cls, config: Config) -> ServiceContainer:
        """Factory that wires all dependencies."""
        return cls(
            report_service=ReportService(config),
            export_service=ExportService(config),
        )
