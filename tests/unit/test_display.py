"""Unit tests for toolboard.display."""

from __future__ import annotations

import pytest

from toolboard.display import (
    ScoreBand,
    avatar_fallback,
    format_chart_day,
    format_date_added,
    link_target,
    score_band,
)


class TestScoreBand:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (None, ScoreBand.PENDING),
            (10.0, ScoreBand.GREAT),
            (8.0, ScoreBand.GREAT),
            (7.999, ScoreBand.PRETTY_GOOD),
            (6.5, ScoreBand.PRETTY_GOOD),
            (6.49, ScoreBand.MEH),
            (0.0, ScoreBand.MEH),
        ],
    )
    def test_boundaries(self, score: float | None, expected: ScoreBand) -> None:
        assert score_band(score) is expected

    def test_display_strings(self) -> None:
        assert score_band(None) == "not yet evaluated"
        assert score_band(9) == "great"
        assert score_band(7) == "pretty good"
        assert score_band(3) == "meh"


class TestLinkTarget:
    def test_query_string_stripped(self) -> None:
        assert link_target("https://cursor.com/?ref=producthunt") == "https://cursor.com/"

    def test_no_query_string(self) -> None:
        assert link_target("https://v0.dev") == "https://v0.dev"

    def test_missing_website(self) -> None:
        assert link_target("") == "#"


class TestFormatting:
    def test_chart_day(self) -> None:
        assert format_chart_day("2024-01-03") == "Jan 3"

    def test_chart_day_unparsable(self) -> None:
        assert format_chart_day("not-a-date") == "not-a-date"

    def test_date_added(self) -> None:
        assert format_date_added("2024-01-03T09:15:00Z") == "Jan 3, 2024"

    def test_date_added_date_only(self) -> None:
        assert format_date_added("2023-12-25") == "Dec 25, 2023"

    def test_date_added_unparsable(self) -> None:
        assert format_date_added("2024-13-45") == "2024-13-45"

    def test_avatar_fallback(self) -> None:
        assert avatar_fallback("Cursor") == "C"
        assert avatar_fallback("") == ""
