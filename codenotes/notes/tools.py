"""Note loading and the note collections used by the site build.

Notes are markdown files with YAML frontmatter. Loading drops drafts up
front, so nothing downstream (collections, tag counts, the notes export)
ever sees them.

Example:
    notes = await load_notes(ContentClient(content_path=Path("src/notes")))
    latest = notes_collection(notes)[:10]
"""

from datetime import UTC, datetime
from pathlib import PurePosixPath

import frontmatter

from codenotes.dependencies import ContentClient, logger
from codenotes.notes.models import IGNORED_TAGS, IndexRecord, Note, NoteFrontmatter
from codenotes.tags.colors import slugify

# Locale-independent month abbreviations.
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# =============================================================================
# Helper Functions
# =============================================================================


def extract_title(body: str, path: str) -> str:
    """Extract note title from the first H1 heading or the file name.

    Examples:
        >>> extract_title("# My Note\\nContent", "notes/my-note.md")
        'My Note'
        >>> extract_title("No heading here", "notes/my-note.md")
        'my-note'
    """
    for line in body.split("\n"):
        line = line.strip()
        if line.startswith("# "):
            return line[2:].strip()
    return PurePosixPath(path).stem


def note_url(path: str) -> str:
    """Site-relative URL of a note rendered from ``path``.

    Examples:
        >>> note_url("Git Rebase.md")
        '/notes/git-rebase/'
    """
    return f"/notes/{slugify(PurePosixPath(path).stem)}/"


def display_tags(tags: list[str]) -> list[str]:
    """Drop template bookkeeping tags, keeping order and casing."""
    return [t for t in tags if t not in IGNORED_TAGS]


def parse_note(content: str, path: str, fallback_date: datetime | None = None) -> Note:
    """Parse a markdown document into a Note.

    Args:
        content: Raw file content, with or without frontmatter
        path: Path relative to the content directory
        fallback_date: Used when the frontmatter has neither created nor modified

    Returns:
        The parsed note (drafts included; callers decide what to publish)

    Raises:
        yaml.YAMLError: If the frontmatter is not valid YAML
        pydantic.ValidationError: If frontmatter fields have the wrong types
    """
    post = frontmatter.loads(content)
    fm = NoteFrontmatter.model_validate(dict(post.metadata))
    date = fm.created or fm.modified or fallback_date or datetime.now(UTC)
    return Note(
        path=path,
        slug=slugify(PurePosixPath(path).stem),
        url=note_url(path),
        title=fm.title or extract_title(post.content, path),
        tags=display_tags(fm.tags),
        date=date,
        created=fm.created,
        modified=fm.modified,
        draft=fm.draft,
        emoji=fm.emoji,
        body=post.content,
    )


# =============================================================================
# Collections
# =============================================================================


async def load_notes(content: ContentClient) -> list[Note]:
    """Load every publishable note from the content directory.

    Files that cannot be parsed are logged and skipped. Drafts are dropped.
    """
    notes: list[Note] = []
    drafts = 0
    for path in await content.list_files():
        try:
            raw = await content.read_file(path)
            note = parse_note(raw, path, fallback_date=await content.modified_at(path))
        except Exception as e:
            logger.warning("note_parse_failed", extra={"path": path, "error": str(e)})
            continue
        if note.draft:
            drafts += 1
            continue
        notes.append(note)

    logger.info("notes_loaded", extra={"count": len(notes), "drafts_skipped": drafts})
    return notes


def notes_collection(notes: list[Note]) -> list[Note]:
    """Publishable notes, newest first."""
    return sorted((n for n in notes if not n.draft), key=lambda n: n.date, reverse=True)


def untagged_notes(notes: list[Note]) -> list[Note]:
    """Publishable notes without any tags, newest first."""
    return [n for n in notes_collection(notes) if n.is_untagged]


# =============================================================================
# Formatting
# =============================================================================


def html_date_string(value: datetime) -> str:
    """Machine-readable UTC date, e.g. ``2024-03-05``."""
    return value.astimezone(UTC).strftime("%Y-%m-%d")


def readable_date(value: datetime) -> str:
    """Human-readable UTC date, e.g. ``05 Mar, 2024``."""
    value = value.astimezone(UTC)
    return f"{value.day:02d} {MONTHS[value.month - 1]}, {value.year}"


def to_index_record(note: Note) -> IndexRecord:
    """Project a note onto the row stored in the hosted search index."""
    return IndexRecord(
        title=note.title,
        url=note.url,
        date=note.date.astimezone(UTC).isoformat(),
        emoji=note.emoji,
        content=note.body,
        tags=note.tags,
    )
