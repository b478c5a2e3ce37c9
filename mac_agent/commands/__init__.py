"""Command surface exposed to the GUI front-end."""

from mac_agent.commands import jobs, runner, settings
from mac_agent.commands.context import CommandContext, build_context
from mac_agent.commands.registry import CommandError, CommandNotFound, CommandRegistry


def build_registry() -> CommandRegistry:
    """Register every command the front-end can invoke."""
    registry = CommandRegistry()
    jobs.register(registry)
    settings.register(registry)
    runner.register(registry)
    return registry


__all__ = [
    "CommandContext",
    "CommandError",
    "CommandNotFound",
    "CommandRegistry",
    "build_context",
    "build_registry",
]
