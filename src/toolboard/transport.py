"""HTTP serving for the toolboard MCP app."""

from __future__ import annotations

import re
import secrets
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.datastructures import Headers
from starlette.responses import PlainTextResponse

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP
    from starlette.types import ASGIApp, Receive, Scope, Send

    from toolboard.config import Settings

log = structlog.get_logger()

_ALLOWED_ORIGIN = re.compile(r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$")
_BEARER = "Bearer "


class LocalOnlyMiddleware:
    """Rejects HTTP requests without the bearer key (when one is required)
    or coming from a browser page that is not served from localhost."""

    def __init__(self, app: ASGIApp, *, auth_enabled: bool, auth_key: str | None = None) -> None:
        self.app = app
        self.auth_enabled = auth_enabled
        self.auth_key = auth_key

    def _has_valid_key(self, headers: Headers) -> bool:
        supplied = headers.get("authorization", "")
        if not supplied.startswith(_BEARER):
            return False
        return secrets.compare_digest(supplied[len(_BEARER) :], self.auth_key or "")

    @staticmethod
    def _origin_allowed(headers: Headers) -> bool:
        origin = headers.get("origin")
        return origin is None or origin == "" or bool(_ALLOWED_ORIGIN.match(origin))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        rejection: PlainTextResponse | None = None
        if self.auth_enabled and not self._has_valid_key(headers):
            rejection = PlainTextResponse("Unauthorized", status_code=401)
        elif not self._origin_allowed(headers):
            rejection = PlainTextResponse("Forbidden", status_code=403)

        if rejection is not None:
            log.info("http_request_rejected", status_code=rejection.status_code)
            await rejection(scope, receive, send)
            return
        await self.app(scope, receive, send)


def run_http_server(mcp: FastMCP, settings: Settings) -> None:
    """Run the Streamable HTTP app under uvicorn until interrupted."""
    server = settings.server
    key = server.auth_key or None
    if server.auth_enabled and key is None:
        key = secrets.token_urlsafe(32)
        log.warning("http_auth_key_generated", auth_key=key)

    app = LocalOnlyMiddleware(
        mcp.streamable_http_app(), auth_enabled=server.auth_enabled, auth_key=key
    )
    log.info("http_server_starting", transport="http", host=server.host, port=server.port)
    # uvicorn's own logging config would bypass structlog
    uvicorn.run(app, host=server.host, port=server.port, log_config=None)
