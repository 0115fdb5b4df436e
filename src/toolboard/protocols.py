"""Protocol interfaces for swappable components.

Pipelines and AppState reference these protocols, not the concrete
implementations, so tests can drive them with in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from toolboard.models.records import ToolRecord


class FetcherProtocol(Protocol):
    """Interface for the collection endpoint fetcher."""

    async def fetch(self) -> list[ToolRecord]: ...
