"""Presentation state machines for the table and chart pipelines.

Each pipeline moves Idle -> Loading -> Ready | Failed. Every trigger (a page,
page size or range change) starts a fresh fetch-and-transform cycle tagged
with a generation number. When a cycle finishes, its result is applied only
if no newer cycle has been started on the same pipeline since; otherwise it
is discarded. Table and chart pipelines never share state.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from toolboard.aggregator import DEFAULT_RANGE_DAYS, aggregate
from toolboard.errors import ToolboardError
from toolboard.paginator import DEFAULT_PAGE_SIZE, clamp_page, paginate

if TYPE_CHECKING:
    from toolboard.models.records import ToolRecord
    from toolboard.models.views import PageView, TimeSeries
    from toolboard.protocols import FetcherProtocol

log = structlog.get_logger()

ViewT = TypeVar("ViewT")

GENERIC_ERROR_MESSAGES = {
    "table": "Error loading tools",
    "chart": "Error loading chart data",
}


class PipelineStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineState(Generic[ViewT]):
    """Snapshot of one pipeline. ``view`` is set only when READY, ``error`` only when FAILED."""

    status: PipelineStatus = PipelineStatus.IDLE
    view: ViewT | None = None
    error: str | None = None
    generation: int = 0


class Pipeline(Generic[ViewT]):
    """Runs fetch-and-transform cycles and keeps the latest state."""

    name = "pipeline"

    def __init__(self, fetcher: FetcherProtocol) -> None:
        self._fetcher = fetcher
        self._generation = 0
        self.state: PipelineState[ViewT] = PipelineState()
        # Survives LOADING and FAILED; replaced only when a READY result is applied
        self.last_ready_view: ViewT | None = None

    @property
    def generation(self) -> int:
        return self._generation

    async def _run(self, transform: Callable[[list[ToolRecord]], ViewT]) -> PipelineState[ViewT]:
        self._generation += 1
        generation = self._generation
        self.state = PipelineState(status=PipelineStatus.LOADING, generation=generation)
        bound_log = log.bind(pipeline=self.name, generation=generation)

        try:
            records = await self._fetcher.fetch()
            outcome: PipelineState[ViewT] = PipelineState(
                status=PipelineStatus.READY,
                view=transform(records),
                generation=generation,
            )
        except ToolboardError as exc:
            outcome = PipelineState(
                status=PipelineStatus.FAILED,
                error=exc.message,
                generation=generation,
            )
        except Exception:
            bound_log.error("pipeline_unexpected_error", exc_info=True)
            outcome = PipelineState(
                status=PipelineStatus.FAILED,
                error=GENERIC_ERROR_MESSAGES.get(self.name, "Error loading data"),
                generation=generation,
            )

        if generation != self._generation:
            bound_log.info("pipeline_result_discarded", latest_generation=self._generation)
            return outcome

        if outcome.status is PipelineStatus.READY:
            self.last_ready_view = outcome.view
            bound_log.info("pipeline_ready")
        else:
            bound_log.warning("pipeline_failed", error=outcome.error)
        self.state = outcome
        return outcome


class TablePipeline(Pipeline["PageView"]):
    """Paginated tool table. Holds the page index and page size controls."""

    name = "table"

    def __init__(self, fetcher: FetcherProtocol, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(fetcher)
        self.page_index = 1
        self.page_size = page_size

    @property
    def total_pages(self) -> int:
        """Total pages of the latest ready view, kept while a newer cycle loads or fails."""
        view = self.last_ready_view
        return view.total_pages if view is not None else 1

    async def refresh(self) -> PipelineState[PageView]:
        # Controls are captured now; a later change must not leak into this cycle
        return await self._run(
            functools.partial(
                _paginate_records, page_index=self.page_index, page_size=self.page_size
            )
        )

    async def go_to_page(self, page_index: int) -> PipelineState[PageView]:
        if page_index < 1:
            raise ValueError(f"page_index must be >= 1, got {page_index}")
        self.page_index = page_index
        return await self.refresh()

    async def set_page_size(self, page_size: int) -> PipelineState[PageView]:
        """Change rows per page and go back to page 1."""
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self.page_index = 1
        return await self.refresh()

    async def first_page(self) -> PipelineState[PageView]:
        return await self.go_to_page(1)

    async def previous_page(self) -> PipelineState[PageView]:
        return await self.go_to_page(max(1, self.page_index - 1))

    async def next_page(self) -> PipelineState[PageView]:
        return await self.go_to_page(clamp_page(self.page_index + 1, self.total_pages))

    async def last_page(self) -> PipelineState[PageView]:
        return await self.go_to_page(self.total_pages)


class ChartPipeline(Pipeline["TimeSeries"]):
    """Tools-published trend chart. Holds the lookback range control."""

    name = "chart"

    def __init__(
        self,
        fetcher: FetcherProtocol,
        range_days: int = DEFAULT_RANGE_DAYS,
        *,
        clock: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(fetcher)
        self.range_days = range_days
        self._clock = clock

    async def refresh(self) -> PipelineState[TimeSeries]:
        return await self._run(
            functools.partial(_aggregate_records, lookback_days=self.range_days, clock=self._clock)
        )

    async def set_range(self, range_days: int) -> PipelineState[TimeSeries]:
        if range_days < 0:
            raise ValueError(f"range_days must not be negative, got {range_days}")
        self.range_days = range_days
        return await self.refresh()


def _paginate_records(records: list[ToolRecord], *, page_index: int, page_size: int) -> PageView:
    return paginate(records, page_index, page_size)


def _aggregate_records(
    records: list[ToolRecord], *, lookback_days: int, clock: Callable[[], date]
) -> TimeSeries:
    return aggregate(records, lookback_days, today=clock())
