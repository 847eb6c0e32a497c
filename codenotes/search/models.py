"""Pydantic models for search results.

Hits come from the hosted index and are not owned by this project, so
every field is optional and unknown fields are ignored.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchHit(BaseModel):
    """A single search result as returned by the hosted index.

    Records are stored verbatim from the notes export, so any field may be
    missing or of an unexpected shape. Every hit is kept; odd values are
    coerced to something the page can show.

    Attributes:
        title: Note title
        url: Site-relative URL of the note
        date: Note date (None if missing or unparseable)
        tags: Tags stored with the record
        emoji: Optional display glyph
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", description="Note title")
    url: str = Field(default="", description="Site-relative URL")
    date: datetime | None = Field(default=None, description="Note date")
    tags: list[str] = Field(default_factory=list, description="Tags from the record")
    emoji: str | None = Field(default=None, description="Display glyph")

    @field_validator("title", "url", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Null becomes an empty string; other scalars are stringified."""
        return "" if v is None else str(v)

    @field_validator("emoji", mode="before")
    @classmethod
    def coerce_emoji(cls, v: Any) -> str | None:
        """Blank or null emoji means none."""
        return str(v) if v else None

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> list[str]:
        """Accept null, a single tag string, or a list of tags."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list | tuple):
            return []
        return [str(t) for t in v if t is not None and str(t).strip()]

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> datetime | None:
        """Read an ISO-8601 date; anything else means no date."""
        if isinstance(v, datetime):
            parsed = v
        elif isinstance(v, str) and v.strip():
            try:
                parsed = datetime.fromisoformat(v.strip())
            except ValueError:
                return None
        else:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed


class SearchPage(BaseModel):
    """Everything the search page template needs.

    Attributes:
        query: The query as typed (empty when none was given)
        hits: Results in the order the index returned them
    """

    query: str = Field(default="", description="Original search query")
    hits: list[SearchHit] = Field(default_factory=list, description="List of results")
