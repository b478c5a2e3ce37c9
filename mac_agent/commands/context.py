"""Shared dependencies handed to every command handler."""

from __future__ import annotations

from dataclasses import dataclass

from mac_agent.config import AppSettings
from mac_agent.keychain import KeychainService
from mac_agent.runner_client import RunnerClient


@dataclass
class CommandContext:
    runner: RunnerClient
    keychain: KeychainService
    settings: AppSettings

    async def close(self) -> None:
        await self.runner.close()


def build_context(app_settings: AppSettings) -> CommandContext:
    """Construct the process-wide runner client and keychain facade once."""
    return CommandContext(
        runner=RunnerClient(
            base_url=app_settings.runner_url,
            timeout=app_settings.request_timeout,
        ),
        keychain=KeychainService(service=app_settings.keychain_service),
        settings=app_settings,
    )
