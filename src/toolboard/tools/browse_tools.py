"""Tool handler for browse_tools.

Applies at most one table control per call, runs the table pipeline and
renders the resulting page. No MCP or FastMCP imports; server.py handles the
MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from toolboard.display import (
    avatar_fallback,
    format_date_added,
    link_target,
    score_band,
)
from toolboard.errors import ErrorCode, ToolboardError
from toolboard.models.tools import BrowseToolsInput, BrowseToolsOutput, Pagination, ToolRow
from toolboard.paginator import PAGE_SIZE_OPTIONS
from toolboard.pipelines import PipelineStatus

if TYPE_CHECKING:
    from toolboard.models.records import ToolRecord
    from toolboard.pipelines import PipelineState, TablePipeline
    from toolboard.state import AppState

EMPTY_MESSAGE = "No tools found."


def render_row(record: ToolRecord) -> ToolRow:
    return ToolRow(
        id=record.id,
        name=record.name,
        tagline=record.tagline,
        avatar_fallback=avatar_fallback(record.name),
        thumbnail_url=record.thumbnail_url,
        topics=list(record.topics),
        score=record.score,
        score_band=score_band(record.score),
        link=link_target(record.website),
        date_added=format_date_added(record.created_at),
    )


async def _apply_controls(validated: BrowseToolsInput, table: TablePipeline) -> PipelineState:
    # A page size change always lands on page 1, whatever page was asked for
    if validated.page_size is not None and validated.page_size != table.page_size:
        return await table.set_page_size(validated.page_size)
    if validated.navigate == "first":
        return await table.first_page()
    if validated.navigate == "previous":
        return await table.previous_page()
    if validated.navigate == "next":
        return await table.next_page()
    if validated.navigate == "last":
        return await table.last_page()
    if validated.page is not None:
        return await table.go_to_page(validated.page)
    return await table.refresh()


async def handle(
    state: AppState,
    page: int | None = None,
    page_size: int | None = None,
    navigate: str | None = None,
) -> dict:
    """Handle a browse_tools tool call."""
    log = structlog.get_logger().bind(tool="browse_tools", page=page, page_size=page_size)
    log.info("handler_called", navigate=navigate)

    try:
        validated = BrowseToolsInput(page=page, page_size=page_size, navigate=navigate)
    except ValueError as exc:
        raise ToolboardError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=(
                f"Use a page of 1 or greater, a page_size from {list(PAGE_SIZE_OPTIONS)}, "
                "and navigate as one of first, previous, next, last."
            ),
            recoverable=False,
        ) from exc

    table = state.table
    result = await _apply_controls(validated, table)
    view = result.view

    if result.status is not PipelineStatus.READY or view is None:
        pagination = Pagination(
            page=table.page_index,
            page_size=table.page_size,
            total_pages=1,
            total_count=0,
            has_previous=False,
            has_next=False,
            page_size_options=list(PAGE_SIZE_OPTIONS),
        )
        output = BrowseToolsOutput(
            status=result.status,
            error=result.error,
            pagination=pagination,
        )
        return output.model_dump(mode="json")

    # The view carries the controls it was built with
    pagination = Pagination(
        page=view.page_index,
        page_size=view.page_size,
        total_pages=view.total_pages,
        total_count=view.total_count,
        has_previous=view.has_previous,
        has_next=view.has_next,
        page_size_options=list(PAGE_SIZE_OPTIONS),
    )
    rows = [render_row(record) for record in view.records]
    log.info("browse_complete", row_count=len(rows), total_count=view.total_count)
    output = BrowseToolsOutput(
        status=result.status,
        message=None if rows else EMPTY_MESSAGE,
        rows=rows,
        pagination=pagination,
    )
    return output.model_dump(mode="json")
