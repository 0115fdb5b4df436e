"""Integration test fixtures.

Provides a fully wired AppState whose fetcher talks to a respx-mocked
collection endpoint. Record fixtures come from tests/conftest.py.
"""

from __future__ import annotations

import os
from datetime import date
from typing import TYPE_CHECKING

import httpx
import pytest

from toolboard.config import Settings
from toolboard.fetcher import Fetcher
from toolboard.pipelines import ChartPipeline, TablePipeline
from toolboard.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

SOURCE_URL = "https://tools.example.com/api/similar-tools"
TODAY = date(2024, 1, 10)


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Env for subprocess-based MCP tests: stdio transport, unreachable source."""
    env = os.environ.copy()
    env["TOOLBOARD__SERVER__TRANSPORT"] = "stdio"
    env["TOOLBOARD__SOURCE__URL"] = "http://127.0.0.1:1/api/similar-tools"
    env["TOOLBOARD__SOURCE__TIMEOUT_SECONDS"] = "2"
    return env


@pytest.fixture()
async def app_state() -> AsyncGenerator[AppState, None]:
    """AppState wired like the server lifespan, with a fixed chart clock."""
    settings = Settings(source={"url": SOURCE_URL})
    async with httpx.AsyncClient() as client:
        fetcher = Fetcher.from_settings(client, settings.source)
        yield AppState(
            settings=settings,
            fetcher=fetcher,
            table=TablePipeline(fetcher, page_size=settings.table.default_page_size),
            chart=ChartPipeline(
                fetcher,
                range_days=settings.chart.default_range_days,
                clock=lambda: TODAY,
            ),
            http_client=client,
        )
