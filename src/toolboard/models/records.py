from __future__ import annotations

import math
import re
from collections.abc import Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def normalize_topic(topic: object) -> str | None:
    """Return the display string for a topic given as a bare string or a ``{name: ...}`` object."""
    if isinstance(topic, str):
        return topic
    if isinstance(topic, Mapping):
        name = topic.get("name")
    else:
        name = getattr(topic, "name", None)
    return name if isinstance(name, str) else None


class ToolRecord(BaseModel):
    """Single entry of the tool collection, as returned by the source endpoint.

    Accepts both the endpoint's snake_case keys and camelCase keys. Only ``id``
    is required; display fields degrade to empty values so one odd record
    still renders as a row.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    tagline: str = ""
    topics: tuple[str, ...] = ()
    thumbnail_url: str = Field(
        default="", validation_alias=AliasChoices("thumbnail_url", "thumbnailUrl")
    )
    website: str = ""
    created_at: str = Field(default="", validation_alias=AliasChoices("created_at", "createdAt"))
    score: float | None = None  # None: not yet evaluated

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> object:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator(
        "name", "tagline", "thumbnail_url", "website", "created_at", mode="before"
    )
    @classmethod
    def coerce_text(cls, v: object) -> str:
        if isinstance(v, str):
            return v
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return ""

    @field_validator("topics", mode="before")
    @classmethod
    def normalize_topics(cls, v: object) -> tuple[str, ...]:
        if not isinstance(v, list | tuple):
            return ()
        names = (normalize_topic(topic) for topic in v)
        return tuple(name for name in names if name is not None)

    @field_validator("score", mode="before")
    @classmethod
    def coerce_score(cls, v: object) -> float | None:
        # Anything that is not a finite number reads as "not yet evaluated"
        if isinstance(v, bool):
            return None
        if isinstance(v, int | float):
            score = float(v)
        elif isinstance(v, str):
            try:
                score = float(v)
            except ValueError:
                return None
        else:
            return None
        return score if math.isfinite(score) else None

    @property
    def created_day(self) -> str | None:
        """``YYYY-MM-DD`` prefix of ``created_at``, or None when it carries no date."""
        if not _DATE_PREFIX_RE.match(self.created_at):
            return None
        return self.created_at[:10]
