"""Prompt extraction from session index entries."""

from __future__ import annotations

from collections.abc import Iterable

from usage_report.models.sessions import PromptRecord, SessionEntry

MAX_PROMPT_CHARS = 500


def extract_prompts(sessions: Iterable[SessionEntry]) -> list[PromptRecord]:
    """One record per session that has a first prompt, in the given order."""
    return [
        PromptRecord(
            date=s.created,
            prompt=s.first_prompt[:MAX_PROMPT_CHARS],
            summary=s.summary,
            project=s.project_name,
            messages=s.message_count,
        )
        for s in sessions
        if s.first_prompt
    ]
