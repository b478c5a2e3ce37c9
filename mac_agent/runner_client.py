"""Runner API client: submits jobs and reads their status from the local runner service."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from mac_agent.schemas.jobs import CreateJobRequest, Job
from mac_agent.schemas.settings import RepoInfo, RunnerHealth, Settings

logger = logging.getLogger(__name__)

_JOB = TypeAdapter(Job)
_JOB_LIST = TypeAdapter(list[Job])
_HEALTH = TypeAdapter(RunnerHealth)
_REPO_LIST = TypeAdapter(list[RepoInfo])


class RunnerClientError(Exception):
    """Any failure talking to the runner, flattened to a readable message."""


def _segment(value: str) -> str:
    """Percent-encode one path segment so ids cannot climb out of /jobs/."""
    if value in ("", ".", ".."):
        raise RunnerClientError(f"Invalid job id: {value!r}")
    return quote(value, safe="")


def _describe_status_error(exc: httpx.HTTPStatusError) -> str:
    resp = exc.response
    detail = ""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        detail = str(body["error"])
    elif resp.text:
        detail = resp.text[:200]
    suffix = f": {detail}" if detail else ""
    return (
        f"Runner returned {resp.status_code} for "
        f"{exc.request.method} {exc.request.url.path}{suffix}"
    )


class RunnerClient:
    """Client for the runner REST API. One HTTP round trip per call, no retries."""

    def __init__(
        self,
        base_url: str = "http://localhost:3847",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """Send one request and return the decoded JSON body.

        Transport errors, HTTP error statuses and undecodable bodies all raise
        RunnerClientError.
        """
        logger.debug("Runner request %s %s", method.upper(), path)
        try:
            resp = await self._client.request(method, path, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            message = _describe_status_error(exc)
            logger.warning("%s", message)
            raise RunnerClientError(message) from exc
        except httpx.HTTPError as exc:
            message = str(exc) or f"{type(exc).__name__} on {method.upper()} {path}"
            logger.warning("Runner unreachable at %s: %s", self.base_url, message)
            raise RunnerClientError(message) from exc
        except ValueError as exc:
            logger.warning("Runner sent a non-JSON body for %s %s", method.upper(), path)
            raise RunnerClientError(f"Invalid JSON from runner: {exc}") from exc

    @staticmethod
    def _parse(adapter: TypeAdapter, data: Any):
        try:
            return adapter.validate_python(data)
        except ValidationError as exc:
            raise RunnerClientError(f"Unexpected response from runner: {exc}") from exc

    # -- jobs -----------------------------------------------------------------

    async def create_job(self, request: CreateJobRequest) -> Job:
        """POST /jobs and return the job as the runner created it."""
        data = await self._request("post", "/jobs", json=request.to_payload())
        job = self._parse(_JOB, data)
        logger.info("Runner job created: %s (%s)", job.id, job.repo)
        return job

    async def list_jobs(self) -> list[Job]:
        data = await self._request("get", "/jobs")
        return self._parse(_JOB_LIST, data)

    async def get_job(self, job_id: str) -> Job:
        data = await self._request("get", f"/jobs/{_segment(job_id)}")
        return self._parse(_JOB, data)

    async def retry_job(self, job_id: str) -> Job:
        data = await self._request("post", f"/jobs/{_segment(job_id)}/retry")
        return self._parse(_JOB, data)

    async def cancel_job(self, job_id: str) -> Job:
        data = await self._request("post", f"/jobs/{_segment(job_id)}/cancel")
        return self._parse(_JOB, data)

    # -- runner housekeeping ----------------------------------------------------

    async def health(self) -> RunnerHealth:
        data = await self._request("get", "/health")
        return self._parse(_HEALTH, data)

    async def sync_settings(self, settings: Settings) -> bool:
        """Push user settings to the runner. Returns the runner's success flag."""
        data = await self._request("post", "/settings", json=settings.to_runner_payload())
        return bool(data.get("success")) if isinstance(data, dict) else False

    async def settings_status(self) -> dict[str, Any]:
        """Redacted view of the settings the runner currently holds."""
        data = await self._request("get", "/settings")
        if not isinstance(data, dict):
            raise RunnerClientError("Unexpected response from runner: expected an object")
        return data

    async def list_repos(self) -> list[RepoInfo]:
        data = await self._request("get", "/repos")
        return self._parse(_REPO_LIST, data)
