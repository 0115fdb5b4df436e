"""Daily publishing counts for the "Tools Published" trend chart.

Records are filtered to a lookback window and bucketed by the date-only
prefix of ``created_at``. Dates are compared as ``YYYY-MM-DD`` strings: the
format is fixed-width and zero-padded, so lexical order is chronological
order. No timezone normalisation is done; "today" is the local calendar date
of the running process.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, timedelta
from typing import TYPE_CHECKING

from toolboard.models.views import TimeSeries, TrendPoint

if TYPE_CHECKING:
    from collections.abc import Iterable

    from toolboard.models.records import ToolRecord

#: Lookback windows offered by the range selector, in display order.
TIME_RANGES: dict[int, str] = {
    90: "last 3 months",
    30: "last 30 days",
    7: "last 7 days",
}

DEFAULT_RANGE_DAYS = 90


def range_label(lookback_days: int) -> str | None:
    """Return the display label for a lookback window, or None if it has none."""
    return TIME_RANGES.get(lookback_days)


def window_bounds(lookback_days: int, today: date | None = None) -> tuple[str, str]:
    """Return ``(since, until)`` as inclusive ``YYYY-MM-DD`` strings."""
    today = today or date.today()
    since = today - timedelta(days=lookback_days)
    return since.isoformat(), today.isoformat()


def aggregate(
    records: Iterable[ToolRecord],
    lookback_days: int,
    *,
    today: date | None = None,
) -> TimeSeries:
    """Count records per creation day within the last ``lookback_days`` days.

    Days without records are omitted, so the result is sparse; chart code must
    treat gaps as "no data". Records whose ``created_at`` carries no date are
    left out of every window.
    """
    since, until = window_bounds(lookback_days, today)
    days = (record.created_day for record in records)
    counts = Counter(day for day in days if day is not None and since <= day <= until)
    return [TrendPoint(day, counts[day]) for day in sorted(counts)]
