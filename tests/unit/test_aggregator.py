"""Unit tests for toolboard.aggregator."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta

import pytest

from toolboard.aggregator import (
    DEFAULT_RANGE_DAYS,
    TIME_RANGES,
    aggregate,
    range_label,
    window_bounds,
)
from toolboard.models.records import ToolRecord

TODAY = date(2024, 1, 10)


def _on(make_record: Callable[..., ToolRecord], day: str, n: int) -> list[ToolRecord]:
    return [make_record(created_at=f"{day}T{hour:02d}:00:00Z") for hour in range(n)]


class TestAggregate:
    def test_counts_per_day(self, make_record: Callable[..., ToolRecord]) -> None:
        records = (
            _on(make_record, "2024-01-03", 3)
            + _on(make_record, "2024-01-01", 2)
            + _on(make_record, "2024-01-02", 1)
        )
        series = aggregate(records, 10, today=TODAY)
        assert series == [("2024-01-01", 2), ("2024-01-02", 1), ("2024-01-03", 3)]

    def test_empty_collection(self) -> None:
        assert aggregate([], 90, today=TODAY) == []

    def test_records_before_window_dropped(self, make_record: Callable[..., ToolRecord]) -> None:
        records = [make_record(created_at="2024-01-02T23:59:59Z")]
        assert aggregate(records, 7, today=TODAY) == []

    def test_window_start_is_inclusive(self, make_record: Callable[..., ToolRecord]) -> None:
        records = [make_record(created_at="2024-01-03T00:00:00Z")]
        assert aggregate(records, 7, today=TODAY) == [("2024-01-03", 1)]

    def test_today_is_inclusive(self, make_record: Callable[..., ToolRecord]) -> None:
        records = [make_record(created_at="2024-01-10T23:00:00Z")]
        assert aggregate(records, 7, today=TODAY) == [("2024-01-10", 1)]

    def test_future_records_dropped(self, make_record: Callable[..., ToolRecord]) -> None:
        records = [make_record(created_at="2024-01-11T00:00:00Z")]
        assert aggregate(records, 7, today=TODAY) == []

    def test_date_only_created_at(self, make_record: Callable[..., ToolRecord]) -> None:
        records = [make_record(created_at="2024-01-05")]
        assert aggregate(records, 7, today=TODAY) == [("2024-01-05", 1)]

    def test_records_without_date_left_out(self, make_record: Callable[..., ToolRecord]) -> None:
        records = [
            make_record(created_at="2024-01-05"),
            make_record(created_at=""),
            make_record(created_at="Jan 5, 2024"),
        ]
        assert aggregate(records, 7, today=TODAY) == [("2024-01-05", 1)]

    def test_no_zero_filled_days(self, make_record: Callable[..., ToolRecord]) -> None:
        records = _on(make_record, "2024-01-04", 1) + _on(make_record, "2024-01-09", 1)
        series = aggregate(records, 7, today=TODAY)
        assert [point.day for point in series] == ["2024-01-04", "2024-01-09"]
        assert all(point.count >= 1 for point in series)

    def test_unlabeled_range_aggregates(self, make_record: Callable[..., ToolRecord]) -> None:
        records = _on(make_record, "2024-01-08", 2) + _on(make_record, "2024-01-01", 1)
        assert aggregate(records, 3, today=TODAY) == [("2024-01-08", 2)]

    @pytest.mark.parametrize("lookback_days", sorted(TIME_RANGES))
    def test_window_properties(
        self, make_record: Callable[..., ToolRecord], lookback_days: int
    ) -> None:
        days = [TODAY - timedelta(days=offset) for offset in range(-3, 120, 4)]
        records = [
            make_record(created_at=f"{d.isoformat()}T08:00:00Z") for d in days for _ in range(2)
        ]

        series = aggregate(records, lookback_days, today=TODAY)
        since = (TODAY - timedelta(days=lookback_days)).isoformat()
        until = TODAY.isoformat()

        keys = [point.day for point in series]
        assert all(since <= key <= until for key in keys)
        assert keys == sorted(set(keys))
        in_window = [r for r in records if since <= r.created_at[:10] <= until]
        assert sum(point.count for point in series) == len(in_window)

    def test_defaults_to_local_today(self, make_record: Callable[..., ToolRecord]) -> None:
        records = [make_record(created_at=date.today().isoformat())]
        assert aggregate(records, 7) == [(date.today().isoformat(), 1)]


class TestWindowBounds:
    def test_bounds(self) -> None:
        assert window_bounds(7, TODAY) == ("2024-01-03", "2024-01-10")

    def test_crosses_year_boundary(self) -> None:
        assert window_bounds(30, TODAY) == ("2023-12-11", "2024-01-10")


class TestRangeLabel:
    def test_known_ranges(self) -> None:
        assert range_label(90) == "last 3 months"
        assert range_label(30) == "last 30 days"
        assert range_label(7) == "last 7 days"

    def test_unknown_range_has_no_label(self) -> None:
        assert range_label(14) is None

    def test_default_range_is_labeled(self) -> None:
        assert range_label(DEFAULT_RANGE_DAYS) is not None
