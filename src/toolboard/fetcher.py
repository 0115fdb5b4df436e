"""HTTP fetcher for the tool collection endpoint.

Every call is a fresh round-trip: no retries, no caching. The Fetcher
receives an httpx.AsyncClient via constructor injection; the server lifespan
owns the client lifecycle.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from toolboard import __version__
from toolboard.errors import ErrorCode, FetchError
from toolboard.models.records import ToolRecord

if TYPE_CHECKING:
    from toolboard.config import SourceSettings

log = structlog.get_logger()

_RECORD_ADAPTER = TypeAdapter(ToolRecord)


def build_http_client(settings: SourceSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": f"toolboard/{__version__}", "Accept": "application/json"},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


def parse_records(payload: object, source_name: str) -> list[ToolRecord]:
    """Validate a decoded JSON body as a list of tool records.

    Raises FetchError if the body is not an array. An entry that cannot be
    read as a record at all (not an object, or no ``id``) is skipped and
    logged; the rest of the collection is kept.
    """
    if not isinstance(payload, list):
        raise FetchError(
            code=ErrorCode.MALFORMED_RESPONSE,
            message=(
                f"Expected a JSON array from {source_name}, got {type(payload).__name__}"
            ),
            suggestion="Check that the source URL points at the tool collection endpoint.",
            recoverable=False,
        )

    records: list[ToolRecord] = []
    for index, item in enumerate(payload):
        try:
            records.append(_RECORD_ADAPTER.validate_python(item))
        except ValidationError as exc:
            log.warning(
                "record_skipped",
                source=source_name,
                index=index,
                error_count=exc.error_count(),
            )
    return records


class Fetcher:
    """Reads the full tool collection from the source endpoint.

    With ``share_inflight`` enabled, callers that arrive while a request is
    already in flight await that request instead of issuing their own.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        source_name: str = "similar-tools",
        share_inflight: bool = False,
    ) -> None:
        self._client = client
        self._url = url
        self._source_name = source_name
        self._share_inflight = share_inflight
        self._inflight: asyncio.Task[list[ToolRecord]] | None = None

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: SourceSettings) -> Fetcher:
        return cls(
            client,
            settings.url,
            source_name=settings.name,
            share_inflight=settings.share_inflight,
        )

    async def fetch(self) -> list[ToolRecord]:
        """Fetch and validate the collection. Raises FetchError on any failure."""
        if not self._share_inflight:
            return await self._fetch_once()

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._fetch_once())
        else:
            log.debug("fetch_joined_inflight", source=self._source_name)
        # Shield so one cancelled caller does not cancel the request for the others
        records = await asyncio.shield(self._inflight)
        return list(records)

    async def _fetch_once(self) -> list[ToolRecord]:
        try:
            response = await self._client.get(self._url)
        except httpx.HTTPError as exc:
            log.warning("fetch_network_error", source=self._source_name, error=str(exc))
            raise FetchError(
                code=ErrorCode.SOURCE_UNAVAILABLE,
                message=f"Network error fetching {self._source_name}: {exc}",
                suggestion="The tool collection endpoint may be temporarily unavailable.",
                recoverable=True,
            ) from exc

        if not response.is_success:
            log.warning(
                "fetch_failed",
                source=self._source_name,
                status_code=response.status_code,
            )
            raise FetchError(
                code=ErrorCode.SOURCE_FETCH_FAILED,
                message=f"Failed to fetch {self._source_name}: HTTP {response.status_code}",
                suggestion="The tool collection endpoint may be temporarily unavailable.",
                recoverable=True,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(
                code=ErrorCode.MALFORMED_RESPONSE,
                message=f"Response from {self._source_name} is not valid JSON",
                suggestion="Check that the source URL points at the tool collection endpoint.",
                recoverable=False,
            ) from exc

        records = parse_records(payload, self._source_name)
        log.info(
            "fetch_complete",
            source=self._source_name,
            status_code=response.status_code,
            record_count=len(records),
        )
        return records
