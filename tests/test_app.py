"""Tests for the local invoke server."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mac_agent.commands import CommandContext
from mac_agent.config import AppSettings
from mac_agent.keychain import KeychainService
from mac_agent.main import create_app
from mac_agent.runner_client import RunnerClientError
from mac_agent.schemas.jobs import Job, JobStatus


def _job(job_id="j1") -> Job:
    now = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    return Job(
        id=job_id,
        task="fix bug",
        repo="org/app",
        status=JobStatus.CODING,
        logs=["started"],
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def ctx():
    return CommandContext(runner=AsyncMock(), keychain=MagicMock(), settings=AppSettings())


@pytest_asyncio.fixture
async def client(ctx):
    app = create_app(AppSettings(ipc_token=""), context=ctx)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["service"] == "mac-agent"


class TestInvoke:
    @pytest.mark.asyncio
    async def test_list_commands(self, client):
        resp = await client.get("/commands")
        assert resp.status_code == 200
        assert "jobs_create" in resp.json()
        assert resp.json() == sorted(resp.json())

    @pytest.mark.asyncio
    async def test_invoke_without_body(self, client, ctx):
        ctx.runner.list_jobs.return_value = [_job()]

        resp = await client.post("/invoke/jobs_list")

        assert resp.status_code == 200
        data = resp.json()
        assert data[0]["id"] == "j1"
        assert data[0]["status"] == "coding"
        assert data[0]["logs"] == ["started"]

    @pytest.mark.asyncio
    async def test_invoke_with_args(self, client, ctx):
        ctx.runner.get_job.return_value = _job("j7")

        resp = await client.post("/invoke/jobs_detail", json={"id": "j7"})

        assert resp.status_code == 200
        assert resp.json()["id"] == "j7"
        ctx.runner.get_job.assert_awaited_once_with("j7")

    @pytest.mark.asyncio
    async def test_missing_secret_is_null(self, client, ctx):
        ctx.keychain.get_secret.return_value = None

        resp = await client.post("/invoke/settings_get_secret", json={"key": "github_token"})

        assert resp.status_code == 200
        assert resp.json() is None

    @pytest.mark.asyncio
    async def test_unknown_command_is_404(self, client):
        resp = await client.post("/invoke/jobs_explode", json={})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Unknown command: jobs_explode"}

    @pytest.mark.asyncio
    async def test_command_failure_is_error_string(self, client, ctx):
        ctx.runner.cancel_job.side_effect = RunnerClientError("Runner returned 404 for POST /jobs/x/cancel: Job not found")

        resp = await client.post("/invoke/jobs_cancel", json={"id": "x"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Runner returned 404 for POST /jobs/x/cancel: Job not found"}


    @pytest.mark.asyncio
    async def test_keychain_backend_error_is_error_string(self, client, ctx):
        ctx.keychain = KeychainService()

        with patch("mac_agent.keychain.keyring") as mock_keyring:
            mock_keyring.get_password.side_effect = OSError("CredRead failed: 1312")
            resp = await client.post("/invoke/settings_get_secret", json={"key": "github_token"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "CredRead failed: 1312"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [[1], "x"])
    async def test_non_object_body_is_error_string(self, client, body):
        resp = await client.post("/invoke/jobs_list", json=body)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Arguments must be a JSON object"}

    @pytest.mark.asyncio
    async def test_malformed_json_is_error_string(self, client):
        resp = await client.post(
            "/invoke/jobs_list",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Invalid request")

class TestIpcToken:
    @pytest_asyncio.fixture
    async def guarded(self, ctx):
        app = create_app(AppSettings(ipc_token="s3cret"), context=ctx)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c

    @pytest.mark.asyncio
    async def test_missing_token_rejected(self, guarded):
        resp = await guarded.post("/invoke/jobs_list")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_token_rejected(self, guarded):
        resp = await guarded.get("/commands", headers={"X-IPC-Token": "nope"})
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_valid_token_accepted(self, guarded, ctx):
        ctx.runner.list_jobs.return_value = []

        resp = await guarded.post("/invoke/jobs_list", headers={"X-IPC-Token": "s3cret"})

        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_health_exempt(self, guarded):
        resp = await guarded.get("/health")
        assert resp.status_code == 200


class TestLifespan:
    @pytest.mark.asyncio
    async def test_shutdown_closes_runner_client(self, ctx):
        app = create_app(AppSettings(), context=ctx)

        async with app.router.lifespan_context(app):
            ctx.runner.close.assert_not_awaited()

        ctx.runner.close.assert_awaited_once()
