"""MCP server entrypoint.

Configures structlog, builds AppState in the FastMCP lifespan, registers the
browse_tools and tools_published tools and starts the configured transport.
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import toolboard.tools.browse_tools as t_browse
import toolboard.tools.tools_published as t_published
from toolboard import __version__
from toolboard.config import Settings
from toolboard.errors import ToolboardError
from toolboard.fetcher import Fetcher, build_http_client
from toolboard.pipelines import ChartPipeline, TablePipeline
from toolboard.state import AppState
from toolboard.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # stdout carries the MCP JSON-RPC stream in stdio mode
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Wire the fetcher and both pipelines from settings."""
    http_client = build_http_client(settings.source)
    fetcher = Fetcher.from_settings(http_client, settings.source)
    return AppState(
        settings=settings,
        fetcher=fetcher,
        table=TablePipeline(fetcher, page_size=settings.table.default_page_size),
        chart=ChartPipeline(fetcher, range_days=settings.chart.default_range_days),
        http_client=http_client,
    )


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        transport=settings.server.transport,
        source=settings.source.url,
    )
    state = build_state(settings)

    try:
        yield state
    finally:
        if state.http_client is not None:
            await state.http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("toolboard", lifespan=lifespan)
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: ToolboardError) -> CallToolResult:
    """Convert a ToolboardError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


@mcp.tool()
async def browse_tools(
    ctx: Context,
    page: int | None = None,
    page_size: int | None = None,
    navigate: str | None = None,
) -> object:
    """Show one page of the AI tool catalog.

    Pass page to jump to a page, navigate ("first", "previous", "next", "last")
    to move relative to the current page, or page_size (10, 20, 30, 40, 50) to
    change rows per page. Changing page_size always returns to page 1.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_browse.handle(state, page=page, page_size=page_size, navigate=navigate)
    except ToolboardError as exc:
        log.warning(
            "tool_error",
            tool="browse_tools",
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="browse_tools", exc_info=True)
        raise


@mcp.tool()
async def tools_published(ctx: Context, range_days: int | None = None) -> object:
    """Daily count of tools published over a lookback window (90, 30 or 7 days)."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_published.handle(state, range_days=range_days)
    except ToolboardError as exc:
        log.warning(
            "tool_error",
            tool="tools_published",
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="tools_published", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()

    if settings.server.transport == "http":
        _setup_logging(settings)
        run_http_server(mcp, settings)
        return

    mcp.run()


if __name__ == "__main__":
    main()
