"""Shared-token guard between the webview front-end and the local invoke server."""

from __future__ import annotations

import secrets

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

_EXEMPT_PATHS = {"/health"}


class IpcTokenMiddleware(BaseHTTPMiddleware):
    """Require X-IPC-Token when a token is configured; pass everything through otherwise."""

    def __init__(self, app, token: str = ""):
        super().__init__(app)
        self.token = token

    async def dispatch(self, request: Request, call_next) -> Response:
        if not self.token:
            return await call_next(request)

        if request.method == "OPTIONS" or request.url.path in _EXEMPT_PATHS:
            return await call_next(request)

        provided = request.headers.get("X-IPC-Token", "")
        if not provided or not secrets.compare_digest(provided, self.token):
            return JSONResponse(
                status_code=401,
                content={"error": "Invalid or missing X-IPC-Token"},
            )

        return await call_next(request)
