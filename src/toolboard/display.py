"""Display rules shared by the table and chart renderers.

Pure functions; nothing here touches the network or pipeline state.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum


class ScoreBand(StrEnum):
    PENDING = "not yet evaluated"
    GREAT = "great"
    PRETTY_GOOD = "pretty good"
    MEH = "meh"


GREAT_THRESHOLD = 8.0
PRETTY_GOOD_THRESHOLD = 6.5


def score_band(score: float | None) -> ScoreBand:
    """Classify a score. Thresholds are inclusive lower bounds of their band."""
    if score is None:
        return ScoreBand.PENDING
    if score >= GREAT_THRESHOLD:
        return ScoreBand.GREAT
    if score >= PRETTY_GOOD_THRESHOLD:
        return ScoreBand.PRETTY_GOOD
    return ScoreBand.MEH


def link_target(website: str) -> str:
    """Strip the query string from a tool's website; ``"#"`` when there is none."""
    if not website:
        return "#"
    return website.split("?", 1)[0]


def avatar_fallback(name: str) -> str:
    return name[:1]


def _parse_iso(value: str) -> datetime:
    return datetime.fromisoformat(value)


def format_chart_day(day: str) -> str:
    """``"2024-01-03"`` -> ``"Jan 3"``. Unparsable values are returned unchanged."""
    try:
        parsed = _parse_iso(day)
    except ValueError:
        return day
    return f"{parsed:%b} {parsed.day}"


def format_date_added(created_at: str) -> str:
    """``"2024-01-03T10:00:00Z"`` -> ``"Jan 3, 2024"``. Unparsable values are returned unchanged."""
    try:
        parsed = _parse_iso(created_at)
    except ValueError:
        return created_at
    return f"{parsed:%b} {parsed.day}, {parsed.year}"
