"""Session index and prompt models."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class SessionEntry(BaseModel):
    """One ``sessions-index.json`` entry tagged with the project it came from.

    Index files are written by another tool and loosely typed, so every field
    is coerced rather than validated: falsy strings become ``""`` and an
    unusable ``messageCount`` becomes 0.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str = ""
    full_path: str = ""
    first_prompt: str = ""
    summary: str = ""
    message_count: int = 0
    created: str = ""
    modified: str = ""
    git_branch: str = ""
    project_path: str = ""
    is_sidechain: bool = False
    project_dir: str = ""
    project_name: str = ""

    @field_validator(
        "session_id",
        "full_path",
        "first_prompt",
        "summary",
        "created",
        "modified",
        "git_branch",
        "project_path",
        "project_dir",
        "project_name",
        mode="before",
    )
    @classmethod
    def _loose_str(cls, value: object) -> str:
        return str(value) if value else ""

    @field_validator("message_count", mode="before")
    @classmethod
    def _loose_int(cls, value: object) -> int:
        if isinstance(value, bool | int):
            return int(value)
        if isinstance(value, float):
            return int(value) if math.isfinite(value) else 0
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                return 0
        return 0

    @field_validator("is_sidechain", mode="before")
    @classmethod
    def _loose_bool(cls, value: object) -> bool:
        return bool(value)


class PromptRecord(BaseModel):
    """The opening prompt of a session, as written to prompts.json."""

    date: str = ""
    prompt: str = ""
    summary: str = ""
    project: str = ""
    messages: int = 0
