"""Runner housekeeping commands."""

from __future__ import annotations

from mac_agent.commands.context import CommandContext
from mac_agent.commands.registry import CommandRegistry
from mac_agent.schemas.settings import RepoInfo, RunnerHealth


async def runner_health(ctx: CommandContext) -> RunnerHealth:
    return await ctx.runner.health()


async def repos_list(ctx: CommandContext) -> list[RepoInfo]:
    return await ctx.runner.list_repos()


def register(registry: CommandRegistry) -> None:
    registry.add("runner_health", runner_health)
    registry.add("repos_list", repos_list)
