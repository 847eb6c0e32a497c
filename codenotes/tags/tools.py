"""Tag aggregation and tag markup.

The aggregator turns the published notes into the sidebar's tag list. The
markup helpers render the coloured badge, link and dot used for a tag on
both the static pages and the search page.

Example:
    tag_list = build_tag_list(notes)
    tag_link("React Native")
    # <a href="/tags/react-native" class="tag" style="...">React Native</a>
"""

from typing import Any

from markupsafe import Markup
from pydantic import ValidationError

from codenotes.dependencies import logger
from codenotes.notes.models import IGNORED_TAGS, Note
from codenotes.tags.colors import colour_from_string, slugify
from codenotes.tags.models import UNTAGGED, TagListExport, TagSummary

NEUTRAL_DOT_COLOR = "#ddd"

# =============================================================================
# Aggregation
# =============================================================================


def summarize_tag(name: str, count: int) -> TagSummary:
    """Build the summary record for one tag."""
    path = slugify(name)
    return TagSummary(name=name, count=count, color=colour_from_string(path), path=path)


def build_tag_list(notes: list[Note]) -> list[TagSummary]:
    """Count tags across published notes.

    Draft notes contribute nothing. Notes without tags are counted under a
    synthetic ``untagged`` entry that is always present, even at zero. The
    result is sorted by count, highest first; equal counts keep the order in
    which tags were first seen, with ``untagged`` after every real tag.

    Args:
        notes: Notes to count (drafts are ignored)

    Returns:
        Tag summaries sorted by descending count
    """
    counts: dict[str, int] = {}
    untagged = 0
    for note in notes:
        if note.draft:
            continue
        tags = [t for t in note.tags if t not in IGNORED_TAGS]
        if not tags:
            untagged += 1
            continue
        # A tag listed twice on one note still counts that note once.
        for tag in dict.fromkeys(tags):
            counts[tag] = counts.get(tag, 0) + 1

    summaries = [summarize_tag(name, count) for name, count in counts.items()]
    summaries.append(summarize_tag(UNTAGGED, untagged))
    summaries.sort(key=lambda t: t.count, reverse=True)
    return summaries


def parse_tag_list_export(data: Any) -> list[TagSummary]:
    """Read a tag-list export payload.

    Accepts the ``{"tagList": [...]}`` document or a bare list. Anything
    else is logged and treated as an empty list.
    """
    if isinstance(data, list):
        data = {"tagList": data}
    try:
        return TagListExport.model_validate(data).tagList
    except ValidationError as e:
        logger.warning("tag_list_invalid", extra={"error": str(e)})
        return []


# =============================================================================
# Markup
# =============================================================================


def tag_badge(tag: str) -> Markup:
    """Coloured, non-linking tag label; empty for a missing tag."""
    if not tag:
        return Markup("")
    color = colour_from_string(slugify(tag))
    return Markup('<span class="badge" style="background-color: {};">{}</span>').format(
        color, tag
    )


def tag_display(tag: str) -> Markup:
    """Coloured tag label as shown on note pages."""
    color = colour_from_string(slugify(tag))
    return Markup('<span class="tag" style="background-color: {};">{}</span>').format(color, tag)


def tag_link(tag: str) -> Markup:
    """Coloured link to a tag's page."""
    path = slugify(tag)
    return Markup(
        '<a href="/tags/{}" class="tag" style="background-color: {};">{}</a>'
    ).format(path, colour_from_string(path), tag)


def tag_dot(tag: str | None) -> Markup:
    """Small coloured marker for the sidebar; neutral grey without a tag."""
    color = colour_from_string(slugify(tag)) if tag else NEUTRAL_DOT_COLOR
    return Markup('<span class="tagDot" style="background-color: {};"></span>').format(color)
