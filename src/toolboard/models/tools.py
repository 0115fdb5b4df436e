from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator

from toolboard.paginator import PAGE_SIZE_OPTIONS

Navigation = Literal["first", "previous", "next", "last"]


class BrowseToolsInput(BaseModel):
    page: int | None = None
    page_size: int | None = None
    navigate: Navigation | None = None

    @field_validator("page")
    @classmethod
    def validate_page(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("page must be 1 or greater")
        return v

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int | None) -> int | None:
        if v is not None and v not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {list(PAGE_SIZE_OPTIONS)}")
        return v


class ToolRow(BaseModel):
    """One rendered table row."""

    id: str
    name: str
    tagline: str
    avatar_fallback: str
    thumbnail_url: str
    topics: list[str]
    score: float | None
    score_band: str
    link: str
    date_added: str


class Pagination(BaseModel):
    page: int
    page_size: int
    total_pages: int
    total_count: int
    has_previous: bool
    has_next: bool
    page_size_options: list[int]


class BrowseToolsOutput(BaseModel):
    status: str
    error: str | None = None
    message: str | None = None  # e.g. "No tools found."
    rows: list[ToolRow] = []
    pagination: Pagination


class ToolsPublishedInput(BaseModel):
    range_days: int | None = None

    @field_validator("range_days")
    @classmethod
    def validate_range_days(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("range_days must not be negative")
        return v


class ChartPoint(BaseModel):
    day: str  # bucket key, YYYY-MM-DD
    label: str  # e.g. "Jan 3"
    count: int


class RangeOption(BaseModel):
    days: int
    label: str


class ToolsPublishedOutput(BaseModel):
    status: str
    error: str | None = None
    range_days: int
    range_label: str | None
    subtitle: str
    total: int = 0
    points: list[ChartPoint] = []
    ranges: list[RangeOption]
