"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan
context manager) and injected into every tool handler via the MCP Context.
The table and chart pipelines share the fetcher but nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from toolboard.config import Settings
    from toolboard.pipelines import ChartPipeline, TablePipeline
    from toolboard.protocols import FetcherProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    fetcher: FetcherProtocol
    table: TablePipeline
    chart: ChartPipeline
    http_client: httpx.AsyncClient | None = None
