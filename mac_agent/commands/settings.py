"""Settings commands: keychain secrets and runner settings sync."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from mac_agent.commands.context import CommandContext
from mac_agent.commands.registry import CommandRegistry
from mac_agent.schemas.settings import Settings


class SecretKeyArgs(BaseModel):
    key: str


class SetSecretArgs(SecretKeyArgs):
    value: str


class SyncSettingsArgs(BaseModel):
    settings: Settings


# Keychain calls block on the OS store, so these stay synchronous and the
# registry runs them in the threadpool.
def settings_set_secret(ctx: CommandContext, key: str, value: str) -> None:
    ctx.keychain.set_secret(key, value)


def settings_get_secret(ctx: CommandContext, key: str) -> str | None:
    return ctx.keychain.get_secret(key)


def settings_delete_secret(ctx: CommandContext, key: str) -> None:
    ctx.keychain.delete_secret(key)


async def settings_sync(ctx: CommandContext, settings: Settings) -> bool:
    return await ctx.runner.sync_settings(settings)


async def settings_status(ctx: CommandContext) -> dict[str, Any]:
    return await ctx.runner.settings_status()


def register(registry: CommandRegistry) -> None:
    registry.add("settings_set_secret", settings_set_secret, SetSecretArgs)
    registry.add("settings_get_secret", settings_get_secret, SecretKeyArgs)
    registry.add("settings_delete_secret", settings_delete_secret, SecretKeyArgs)
    registry.add("settings_sync", settings_sync, SyncSettingsArgs)
    registry.add("settings_status", settings_status)
