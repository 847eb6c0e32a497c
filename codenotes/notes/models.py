"""Pydantic models for note documents."""

from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Bookkeeping tags added by page templates; never shown or counted.
IGNORED_TAGS = frozenset({"post", "all"})


class NoteFrontmatter(BaseModel):
    """YAML frontmatter metadata for notes.

    Attributes:
        title: Display title (falls back to the first H1 or file name)
        tags: Tags for the note; missing, null or empty all mean untagged
        created: When the note was originally written
        modified: When the note was last changed
        draft: Draft notes are excluded from every public collection
        emoji: Optional glyph shown before the title

    Example frontmatter:
        ---
        title: Git rebase onto
        tags:
          - git
        created: 2024-03-05
        emoji: 🌳
        ---
    """

    title: str | None = None
    tags: list[str] = Field(default_factory=list)
    created: datetime | None = None
    modified: datetime | None = None
    draft: bool = False
    emoji: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> list[str]:
        """Accept a single tag string, a list, or nothing."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [str(t) for t in v if t is not None and str(t).strip()]

    @field_validator("created", "modified", mode="before")
    @classmethod
    def coerce_dates(cls, v: Any) -> Any:
        """YAML loads bare dates as `date`; promote them to midnight UTC."""
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime(v.year, v.month, v.day, tzinfo=UTC)
        return v

    @field_validator("created", "modified")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        """Naive timestamps are taken to be UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @field_validator("draft", mode="before")
    @classmethod
    def normalize_draft(cls, v: Any) -> bool:
        """Treat a null draft flag as not a draft."""
        return False if v is None else v


class Note(BaseModel):
    """A parsed, publishable note.

    Attributes:
        path: Source path relative to the content directory
        slug: URL slug derived from the file name
        url: Site-relative URL of the rendered note
        title: Note title
        tags: Display tags (template bookkeeping tags removed)
        date: Created date, or modified date when no created date is set
        draft: Draft flag from frontmatter
        emoji: Optional display glyph
        body: Markdown body after the frontmatter
    """

    path: str
    slug: str
    url: str
    title: str
    tags: list[str] = Field(default_factory=list)
    date: datetime
    created: datetime | None = None
    modified: datetime | None = None
    draft: bool = False
    emoji: str | None = None
    body: str = ""

    @property
    def is_untagged(self) -> bool:
        """True when the note carries no display tags."""
        return not self.tags


class IndexRecord(BaseModel):
    """A row of the notes export, stored verbatim in the search index."""

    title: str
    url: str
    date: str
    emoji: str | None = None
    content: str = ""
    tags: list[str] = Field(default_factory=list)
