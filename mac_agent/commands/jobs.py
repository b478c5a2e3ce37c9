"""Job commands: thin wrappers over the runner client."""

from __future__ import annotations

from pydantic import BaseModel

from mac_agent.commands.context import CommandContext
from mac_agent.commands.registry import CommandRegistry
from mac_agent.schemas.jobs import CreateJobRequest, Job


class CreateJobArgs(BaseModel):
    request: CreateJobRequest


class JobIdArgs(BaseModel):
    id: str


async def jobs_create(ctx: CommandContext, request: CreateJobRequest) -> Job:
    return await ctx.runner.create_job(request)


async def jobs_list(ctx: CommandContext) -> list[Job]:
    return await ctx.runner.list_jobs()


async def jobs_detail(ctx: CommandContext, id: str) -> Job:
    return await ctx.runner.get_job(id)


async def jobs_retry(ctx: CommandContext, id: str) -> Job:
    return await ctx.runner.retry_job(id)


async def jobs_cancel(ctx: CommandContext, id: str) -> Job:
    return await ctx.runner.cancel_job(id)


def register(registry: CommandRegistry) -> None:
    registry.add("jobs_create", jobs_create, CreateJobArgs)
    registry.add("jobs_list", jobs_list)
    registry.add("jobs_detail", jobs_detail, JobIdArgs)
    registry.add("jobs_retry", jobs_retry, JobIdArgs)
    registry.add("jobs_cancel", jobs_cancel, JobIdArgs)
