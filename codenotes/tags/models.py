"""Pydantic models for tag summaries."""

from pydantic import BaseModel, Field

UNTAGGED = "untagged"


class TagSummary(BaseModel):
    """Tag with usage count.

    Recomputed from scratch on every build, never updated in place.

    Attributes:
        name: Tag name as written in frontmatter
        count: Number of published notes carrying this tag
        color: HSLA colour derived from the tag slug
        path: URL slug of the tag page
    """

    name: str = Field(..., description="Tag name as written")
    count: int = Field(default=0, ge=0)
    color: str = Field(default="", description="HSLA colour")
    path: str = Field(default="", description="Tag page slug")


class TagListExport(BaseModel):
    """The tag-list export published at ``/api/taglist.json``."""

    tagList: list[TagSummary] = Field(default_factory=list)
