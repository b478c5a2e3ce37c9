"""Command table the GUI front-end invokes by name."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from mac_agent.commands.context import CommandContext
from mac_agent.keychain import KeychainError
from mac_agent.runner_client import RunnerClientError

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A command failed; the message is meant to be shown to the user as-is."""


class CommandNotFound(CommandError):
    """No command is registered under the requested name."""


@dataclass
class Command:
    name: str
    handler: Callable[..., Any]
    args_model: type[BaseModel] | None = None


class CommandRegistry:
    """Maps command names to handlers.

    Handlers take the CommandContext followed by the fields of their
    argument model as keyword arguments. Blocking handlers are run in the
    threadpool.
    """

    def __init__(self):
        self._commands: dict[str, Command] = {}

    def add(
        self,
        name: str,
        handler: Callable[..., Any],
        args_model: type[BaseModel] | None = None,
    ) -> None:
        if name in self._commands:
            raise ValueError(f"Command {name} is already registered")
        self._commands[name] = Command(name=name, handler=handler, args_model=args_model)

    def names(self) -> list[str]:
        return sorted(self._commands)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def _bind(self, command: Command, args: dict[str, Any]) -> dict[str, Any]:
        if command.args_model is None:
            return {}
        try:
            parsed = command.args_model.model_validate(args)
        except ValidationError as exc:
            raise CommandError(f"Invalid arguments for {command.name}: {exc}") from exc
        return {field: getattr(parsed, field) for field in type(parsed).model_fields}

    async def invoke(
        self,
        name: str,
        ctx: CommandContext,
        args: Any = None,
    ) -> Any:
        """Run a command and return its JSON-compatible result.

        ``args`` is the decoded JSON body. Raises CommandNotFound for unknown
        names and CommandError for any other failure, including a body that
        is not an object.
        """
        command = self._commands.get(name)
        if command is None:
            raise CommandNotFound(f"Unknown command: {name}")
        if args is not None and not isinstance(args, dict):
            raise CommandError("Arguments must be a JSON object")

        kwargs = self._bind(command, args or {})
        logger.debug("Invoking command %s", name)
        try:
            if inspect.iscoroutinefunction(command.handler):
                result = await command.handler(ctx, **kwargs)
            else:
                result = await run_in_threadpool(command.handler, ctx, **kwargs)
        except (RunnerClientError, KeychainError) as exc:
            raise CommandError(str(exc)) from exc
        return jsonable_encoder(result, by_alias=False)
