"""Shared test fixtures for the toolboard test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from toolboard.models.records import ToolRecord


@pytest.fixture()
def make_record() -> Callable[..., ToolRecord]:
    """Factory for tool records; every field can be overridden by keyword."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> ToolRecord:
        n = next(counter)
        data: dict[str, Any] = {
            "id": f"tool-{n}",
            "name": f"Tool {n}",
            "tagline": f"Tagline {n}",
            "topics": ["ai"],
            "thumbnail_url": f"https://cdn.example.com/{n}.png",
            "website": f"https://tool{n}.example.com/?ref=producthunt",
            "created_at": "2024-01-01T12:00:00Z",
            "score": None,
        }
        data.update(overrides)
        return ToolRecord.model_validate(data)

    return _make


@pytest.fixture()
def raw_records() -> list[dict[str, Any]]:
    """Tool records as the collection endpoint serves them."""
    return [
        {
            "id": "cursor",
            "name": "Cursor",
            "tagline": "The AI code editor",
            "topics": ["ai", {"name": "developer tools"}],
            "thumbnail_url": "https://cdn.example.com/cursor.png",
            "website": "https://cursor.com/?ref=producthunt",
            "created_at": "2024-01-03T09:15:00Z",
            "score": 8.4,
        },
        {
            "id": "v0",
            "name": "v0",
            "tagline": "Generate UI with simple text prompts",
            "topics": [{"name": "design"}],
            "thumbnail_url": "https://cdn.example.com/v0.png",
            "website": "https://v0.dev",
            "created_at": "2024-01-02T18:40:00Z",
            "score": 6.5,
        },
        {
            "id": "bolt",
            "name": "Bolt",
            "tagline": "Prompt, run, edit and deploy full-stack apps",
            "thumbnail_url": "https://cdn.example.com/bolt.png",
            "website": "https://bolt.new?utm_source=ph",
            "created_at": "2024-01-03T22:05:00Z",
        },
    ]
