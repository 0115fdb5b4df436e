from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from toolboard.models.records import ToolRecord


@dataclass(frozen=True)
class PageView:
    """One page of the tool table. Rebuilt on every fetch or control change."""

    records: tuple[ToolRecord, ...]
    page_index: int  # 1-based
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        # Never zero, so an empty collection still shows "Page 1 of 1"
        return max(1, math.ceil(self.total_count / self.page_size))

    @property
    def has_previous(self) -> bool:
        return self.page_index > 1

    @property
    def has_next(self) -> bool:
        return self.page_index < self.total_pages


class TrendPoint(NamedTuple):
    """Number of tools created on one calendar day."""

    day: str  # YYYY-MM-DD
    count: int


# Ascending by day, only days with at least one record.
TimeSeries = list[TrendPoint]
