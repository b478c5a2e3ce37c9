"""Pydantic schemas for runner jobs."""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import Field

from mac_agent.schemas.base import WireModel


class JobStatus(str, enum.Enum):
    QUEUED = "queued"
    CODING = "coding"
    PATCHING = "patching"
    TESTING = "testing"
    PR_OPENED = "pr_opened"
    FAILED = "failed"
    CANCELLED = "cancelled"


class SkillContext(WireModel):
    name: str
    content: str


class CreateJobRequest(WireModel):
    task: str
    repo: str
    dry_run: bool = False
    skip_tests: bool | None = None

    def to_payload(self) -> dict:
        """JSON body for POST /jobs.

        The runner reads the test toggle as ``skipTests``; it is left out when unset.
        """
        payload = self.model_dump(mode="json", exclude={"skip_tests"})
        if self.skip_tests is not None:
            payload["skipTests"] = self.skip_tests
        return payload


class Job(WireModel):
    """Read-only mirror of a job owned by the runner."""

    id: str
    task: str
    repo: str
    branch: str | None = None
    base_branch: str | None = None
    status: JobStatus
    pr_url: str | None = None
    error: str | None = None
    logs: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    dry_run: bool = False
    skip_tests: bool = False
    retry_count: int = 0
    skills: list[SkillContext] | None = None

    model_config = {"frozen": True}