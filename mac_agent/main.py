"""mac-agent desktop shell: local command server for the GUI front-end."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from mac_agent import __version__
from mac_agent.commands import CommandContext, CommandRegistry, build_context, build_registry
from mac_agent.config import AppSettings, settings as default_settings
from mac_agent.middleware.ipc_token import IpcTokenMiddleware
from mac_agent.routes import invoke


def create_app(
    app_settings: AppSettings | None = None,
    context: CommandContext | None = None,
    registry: CommandRegistry | None = None,
) -> FastAPI:
    """Build the app with its dependencies wired in explicitly.

    The context is built here, once per app, and closed by the lifespan.
    ``context`` and ``registry`` default to freshly built ones; passing them
    lets callers (and tests) supply their own runner client or keychain.
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.context.close()

    app = FastAPI(
        title="mac-agent",
        description="Desktop shell commands: runner jobs and keychain secrets",
        version=__version__,
        lifespan=lifespan,
        debug=app_settings.debug,
    )
    app.state.settings = app_settings
    app.state.context = context or build_context(app_settings)
    app.state.registry = registry or build_registry()

    app.add_middleware(IpcTokenMiddleware, token=app_settings.ipc_token)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(invoke.router)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        message = "; ".join(str(e.get("msg", "")) for e in exc.errors()) or "invalid request"
        return JSONResponse(status_code=400, content={"error": f"Invalid request: {message}"})

    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": "mac-agent", "version": __version__}

    return app
