"""Shared fixtures for usage report tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from usage_report.config import Config

SAMPLE_STATS = {
    "version": 1,
    "lastComputedDate": "2026-01-04",
    "firstSessionDate": "2026-01-01T09:00:00.000Z",
    "totalSessions": 12,
    "totalMessages": 160,
    "modelUsage": {
        "claude-sonnet-4-5-20250929": {
            "inputTokens": 1000,
            "outputTokens": 2000,
            "cacheReadInputTokens": 30000,
            "cacheCreationInputTokens": 4000,
        },
        "claude-opus-4-6": {
            "inputTokens": 5000,
            "outputTokens": 10000,
            "cacheReadInputTokens": 500000,
            "cacheCreationInputTokens": 20000,
        },
        "claude-haiku-4-5-20251001": {"inputTokens": 10, "outputTokens": 20},
    },
    "dailyActivity": [
        {"date": "2026-01-01", "messageCount": 10, "sessionCount": 2, "toolCallCount": 4},
        {"date": "2026-01-02", "messageCount": 50, "sessionCount": 4, "toolCallCount": 20},
        {"date": "2026-01-03", "messageCount": 50, "sessionCount": 3},
        {"date": "2026-01-04", "messageCount": 50, "sessionCount": 3, "toolCallCount": 6},
    ],
    "hourCounts": {"9": 40, "10": 80, "23": 40},
}

SAMPLE_INDEX = {
    "version": 1,
    "entries": [
        {
            "sessionId": "sess-001",
            "fullPath": "/tmp/sess-001.jsonl",
            "firstPrompt": "Hello, can you help me fix a bug in my Python code?",
            "summary": "Fixed Python add function bug",
            "messageCount": 12,
            "created": "2026-01-02T10:00:00.000Z",
            "modified": "2026-01-02T10:30:00.000Z",
            "gitBranch": "main",
            "projectPath": "/Users/test/myproject",
            "isSidechain": False,
        },
        {
            "sessionId": "sess-002",
            "firstPrompt": "",
            "messageCount": 3,
            "created": "2026-01-03T08:00:00.000Z",
        },
    ],
}

OTHER_INDEX = {
    "entries": [
        {
            "sessionId": "sess-003",
            "firstPrompt": "Write a changelog",
            "messageCount": 4,
            "created": "2026-01-04T12:00:00.000Z",
        },
        "not-an-object",
    ]
}


@pytest.fixture
def sample_stats() -> dict[str, object]:
    """A fresh copy of the sample stats cache payload."""
    return copy.deepcopy(SAMPLE_STATS)


@pytest.fixture
def tmp_claude_dir(tmp_path: Path) -> Path:
    """Create a temporary Claude directory with a stats cache and two projects."""
    claude_dir = tmp_path / ".claude"
    claude_dir.mkdir()
    (claude_dir / "stats-cache.json").write_text(json.dumps(SAMPLE_STATS), encoding="utf-8")

    first = claude_dir / "projects" / "-Users-test-myproject"
    first.mkdir(parents=True)
    (first / "sessions-index.json").write_text(json.dumps(SAMPLE_INDEX), encoding="utf-8")

    second = claude_dir / "projects" / "-Users-test-docs"
    second.mkdir(parents=True)
    (second / "sessions-index.json").write_text(json.dumps(OTHER_INDEX), encoding="utf-8")

    # A project directory without an index is ignored.
    (claude_dir / "projects" / "-Users-test-empty").mkdir()
    return claude_dir


@pytest.fixture
def test_config(tmp_claude_dir: Path, tmp_path: Path) -> Config:
    """Config pointing at temporary test data."""
    return Config(claude_dir=tmp_claude_dir, out_dir=tmp_path / "out")
