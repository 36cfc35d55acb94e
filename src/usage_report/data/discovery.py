"""Discover Claude session index entries across all projects."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from usage_report.config import Config
from usage_report.models.sessions import SessionEntry

logger = logging.getLogger(__name__)

_INDEX_FILE = "sessions-index.json"


def _project_name_from_dir(project_dir: str) -> str:
    """Decode a project dir name '-Users-foo-src-app' -> 'Users/foo/src/app'."""
    return project_dir.replace("-", "/").removeprefix("/")


def _parse_created(value: str) -> float | None:
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.timestamp()


def _newest_first_key(session: SessionEntry) -> tuple[bool, float]:
    created = _parse_created(session.created)
    return (created is not None, created or 0.0)


def load_all_sessions(config: Config) -> list[SessionEntry]:
    """Merge every project's session index, newest ``created`` first.

    Entries with a missing or unparseable ``created`` go last. Unreadable
    index files are logged and skipped.
    """
    projects_dir = config.projects_dir
    if not projects_dir.is_dir():
        logger.info("Claude projects directory not found: %s", projects_dir)
        return []

    sessions: list[SessionEntry] = []
    for entry in sorted(projects_dir.iterdir()):
        if not entry.is_dir():
            continue
        index_path = entry / _INDEX_FILE
        if not index_path.is_file():
            continue
        project_name = _project_name_from_dir(entry.name)
        for raw in _load_index_entries(index_path):
            sessions.append(_to_session_entry(raw, entry.name, project_name))

    sessions.sort(key=_newest_first_key, reverse=True)
    return sessions


def _load_index_entries(index_path: Path) -> list[dict[str, object]]:
    """Load the ``entries`` list of a sessions index, ignoring non-object items."""
    try:
        with open(index_path, encoding="utf-8") as file:
            data = json.load(file)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        logger.warning("Failed to load sessions index %s: %s", index_path, exc)
        return []
    if not isinstance(data, dict):
        logger.warning("Ignoring sessions index %s: not a JSON object", index_path)
        return []
    entries = data.get("entries") or []
    if not isinstance(entries, list):
        logger.warning("Ignoring sessions index %s: 'entries' is not a list", index_path)
        return []
    return [e for e in entries if isinstance(e, dict)]


def _to_session_entry(raw: dict[str, object], project_dir: str, project_name: str) -> SessionEntry:
    tagged = {**raw, "projectDir": project_dir, "projectName": project_name}
    return SessionEntry.model_validate(tagged)
