"""Pydantic schemas for user settings and runner housekeeping endpoints."""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import Field

from mac_agent.schemas.base import WireModel


class Provider(str, enum.Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class RepoConfig(WireModel):
    path: str
    name: str
    test_command: str | None = None
    forbidden_paths: list[str] = Field(default_factory=list)


class Settings(WireModel):
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    anthropic_api_key: str | None = None
    anthropic_base_url: str | None = None
    preferred_provider: Provider = Provider.ANTHROPIC
    github_token: str | None = None
    slack_webhook_url: str | None = None
    repos: list[RepoConfig] = Field(default_factory=list)
    max_changed_files: int = 10
    max_diff_size: int = 5000
    auto_retry: bool = True
    skip_tests_by_default: bool = True

    def to_runner_payload(self) -> dict:
        """Body for POST /settings. The runner keys settings in camelCase and has no use for repos."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"repos"},
            exclude_none=True,
        )


class RunnerHealth(WireModel):
    status: str
    timestamp: datetime | None = None


class RepoInfo(WireModel):
    name: str
    path: str
