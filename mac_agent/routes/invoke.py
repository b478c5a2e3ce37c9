"""Invoke endpoint: the front-end calls commands by name with a JSON argument object."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from mac_agent.commands import CommandContext, CommandError, CommandNotFound, CommandRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["commands"])


def get_registry(request: Request) -> CommandRegistry:
    return request.app.state.registry


def get_context(request: Request) -> CommandContext:
    return request.app.state.context


@router.get("/commands", response_model=list[str])
async def list_commands(registry: CommandRegistry = Depends(get_registry)):
    """Names of every command that can be invoked."""
    return registry.names()


@router.post("/invoke/{command}")
async def invoke_command(
    command: str,
    args: Any = Body(default=None),
    registry: CommandRegistry = Depends(get_registry),
    ctx: CommandContext = Depends(get_context),
):
    """Run one command. Failures come back as {"error": "<message>"}."""
    try:
        result = await registry.invoke(command, ctx, args)
    except CommandNotFound as exc:
        return JSONResponse(status_code=404, content={"error": str(exc)})
    except CommandError as exc:
        logger.info("Command %s failed: %s", command, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})
    return JSONResponse(content=result)
