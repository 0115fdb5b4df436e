"""Tool handler for tools_published.

Runs the chart pipeline for the requested lookback range and renders the
trend points with display labels. No MCP or FastMCP imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from toolboard.aggregator import TIME_RANGES, range_label
from toolboard.display import format_chart_day
from toolboard.errors import ErrorCode, ToolboardError
from toolboard.models.tools import (
    ChartPoint,
    RangeOption,
    ToolsPublishedInput,
    ToolsPublishedOutput,
)
from toolboard.pipelines import PipelineStatus

if TYPE_CHECKING:
    from toolboard.state import AppState


def subtitle_for(range_days: int) -> str:
    label = range_label(range_days)
    if label is None:
        return f"Total for the last {range_days} days"
    return f"Total for the {label}"


def range_options() -> list[RangeOption]:
    return [RangeOption(days=days, label=label.capitalize()) for days, label in TIME_RANGES.items()]


async def handle(state: AppState, range_days: int | None = None) -> dict:
    """Handle a tools_published tool call."""
    log = structlog.get_logger().bind(tool="tools_published", range_days=range_days)
    log.info("handler_called")

    try:
        validated = ToolsPublishedInput(range_days=range_days)
    except ValueError as exc:
        raise ToolboardError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=f"Use one of the offered ranges: {list(TIME_RANGES)} days.",
            recoverable=False,
        ) from exc

    chart = state.chart
    # Captured before awaiting: a concurrent call may change the range meanwhile
    if validated.range_days is not None:
        requested = validated.range_days
        result = await chart.set_range(requested)
    else:
        requested = chart.range_days
        result = await chart.refresh()

    if result.status is not PipelineStatus.READY or result.view is None:
        output = ToolsPublishedOutput(
            status=result.status,
            error=result.error,
            range_days=requested,
            range_label=range_label(requested),
            subtitle=subtitle_for(requested),
            ranges=range_options(),
        )
        return output.model_dump(mode="json")

    points = [
        ChartPoint(day=point.day, label=format_chart_day(point.day), count=point.count)
        for point in result.view
    ]
    total = sum(point.count for point in points)
    log.info("trend_complete", point_count=len(points), total=total)
    output = ToolsPublishedOutput(
        status=result.status,
        range_days=requested,
        range_label=range_label(requested),
        subtitle=subtitle_for(requested),
        total=total,
        points=points,
        ranges=range_options(),
    )
    return output.model_dump(mode="json")
