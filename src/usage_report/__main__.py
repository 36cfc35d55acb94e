"""Allow ``python -m usage_report``."""

from usage_report.cli import app

app()
