"""Client-side pagination over the full tool collection.

The source endpoint always returns the whole collection, so paging is a
slice over whatever order the source produced. No sorting is applied.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from toolboard.models.views import PageView

if TYPE_CHECKING:
    from toolboard.models.records import ToolRecord

PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 20, 30, 40, 50)
DEFAULT_PAGE_SIZE = 10


def paginate(records: Sequence[ToolRecord], page_index: int, page_size: int) -> PageView:
    """Return the slice of ``records`` shown on ``page_index`` (1-based).

    An index past the last page yields an empty or short slice rather than an
    error; callers clamp with :func:`clamp_page` when they need to.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    if page_index < 1:
        raise ValueError(f"page_index must be >= 1, got {page_index}")

    start = (page_index - 1) * page_size
    stop = start + page_size
    return PageView(
        records=tuple(records[start:stop]),
        page_index=page_index,
        page_size=page_size,
        total_count=len(records),
    )


def clamp_page(page_index: int, total_pages: int) -> int:
    """Clamp a page index into ``[1, total_pages]``."""
    return max(1, min(page_index, max(1, total_pages)))
