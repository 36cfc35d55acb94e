"""Load and normalize the Claude ``stats-cache.json`` snapshot."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError
from result import Err, Ok, Result

from usage_report.models.usage import UsageSnapshot

logger = logging.getLogger(__name__)

_MAX_REPORTED_ERRORS = 5


def normalize_snapshot(raw: object) -> Result[UsageSnapshot, str]:
    """Validate a decoded stats cache into a fully populated snapshot.

    Missing or null counters become 0. Wrong shapes, non-numeric or negative
    counters and hour keys outside 0..23 are rejected.
    """
    if not isinstance(raw, dict):
        return Err(f"Stats cache must be a JSON object, got {type(raw).__name__}")
    try:
        return Ok(UsageSnapshot.model_validate(raw))
    except ValidationError as exc:
        return Err(f"Invalid stats cache: {_describe_errors(exc)}")


def load_snapshot(path: Path) -> Result[UsageSnapshot, str]:
    """Read, decode and normalize the stats cache at ``path``."""
    if not path.is_file():
        return Err(f"Stats cache not found: {path}")
    try:
        with open(path, encoding="utf-8") as file:
            raw = json.load(file)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        logger.warning("Failed to read stats cache %s: %s", path, exc)
        return Err(f"Failed to read stats cache {path}: {exc}")

    snapshot = normalize_snapshot(raw)
    if isinstance(snapshot, Ok):
        logger.debug(
            "Loaded %d models and %d days from %s",
            len(snapshot.ok_value.model_usage),
            len(snapshot.ok_value.daily_activity),
            path,
        )
    return snapshot


def _describe_errors(exc: ValidationError) -> str:
    errors = exc.errors()
    parts = [
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in errors[:_MAX_REPORTED_ERRORS]
    ]
    if len(errors) > _MAX_REPORTED_ERRORS:
        parts.append(f"and {len(errors) - _MAX_REPORTED_ERRORS} more")
    return "; ".join(parts)
