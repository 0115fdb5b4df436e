from __future__ import annotations

from toolboard.models.records import ToolRecord, normalize_topic
from toolboard.models.views import PageView, TimeSeries, TrendPoint

# Tool input/output models live in toolboard.models.tools; they depend on the
# paginator, which itself imports from this package.

__all__ = [
    # records
    "ToolRecord",
    "normalize_topic",
    # views
    "PageView",
    "TrendPoint",
    "TimeSeries",
]
