"""Search page data: query the hosted index and load the tag list.

Both lookups degrade instead of failing: a broken index or a missing
tag-list export leaves the page with fewer results or an empty sidebar,
never an error page.

Example:
    hits, tag_list = await asyncio.gather(
        run_search(index, "rebase"),
        fetch_tag_list(http, "https://notes.example.com"),
    )
"""

import httpx
from pydantic import ValidationError

from codenotes.dependencies import logger
from codenotes.search.index import SearchIndex
from codenotes.search.models import SearchHit
from codenotes.tags.models import TagSummary
from codenotes.tags.tools import parse_tag_list_export

TAG_LIST_PATH = "/api/taglist.json"


async def run_search(index: SearchIndex, query: str) -> list[SearchHit]:
    """Search the hosted index.

    Args:
        index: Search-only index handle
        query: Query string; blank queries are not sent to the index

    Returns:
        Hits in the order the index ranked them (empty on any failure)
    """
    query = query.strip()
    if not query:
        return []

    try:
        raw_hits = await index.search(query)
    except Exception as e:
        logger.error("search_failed", extra={"query": query, "error": str(e)}, exc_info=True)
        return []

    hits: list[SearchHit] = []
    for raw in raw_hits:
        try:
            hits.append(SearchHit.model_validate(raw))
        except ValidationError as e:
            logger.warning("search_hit_invalid", extra={"query": query, "error": str(e)})
    logger.info("search_completed", extra={"query": query, "hits": len(hits)})
    return hits


async def fetch_tag_list(http: httpx.AsyncClient, base_url: str) -> list[TagSummary]:
    """Fetch the tag-list export published with the site.

    Args:
        http: Outbound HTTP client
        base_url: Site origin the export is published under

    Returns:
        Tag summaries in export order (empty if the fetch fails)
    """
    url = base_url.rstrip("/") + TAG_LIST_PATH
    try:
        response = await http.get(url)
        response.raise_for_status()
        data = response.json()
    except Exception as e:
        logger.warning("tag_list_fetch_failed", extra={"url": url, "error": str(e)})
        return []
    return parse_tag_list_export(data)
