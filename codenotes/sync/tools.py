"""Index sync job run after each successful deploy.

Fetches the notes export from the freshly deployed site and replaces the
whole hosted index with it. Failures are reported back to the caller as a
SyncFailure rather than raised; nothing is retried.
"""

import time
from typing import Any

import httpx

from codenotes.dependencies import IndexSyncError, logger
from codenotes.search.index import SearchIndex
from codenotes.sync.models import SyncFailure, SyncResult

NOTES_EXPORT_PATH = "/algolia.json"


async def fetch_notes_export(http: httpx.AsyncClient, site_url: str) -> list[dict[str, Any]]:
    """Download the notes export from the deployed site.

    Raises:
        IndexSyncError: If the request fails or the payload is not a JSON array
    """
    url = site_url.rstrip("/") + NOTES_EXPORT_PATH
    try:
        response = await http.get(url)
    except httpx.HTTPError as e:
        raise IndexSyncError(f"Failed to fetch algolia.json: {e!s}") from e
    if not response.is_success:
        raise IndexSyncError(f"Failed to fetch algolia.json: {response.status_code}")

    try:
        records = response.json()
    except ValueError as e:
        raise IndexSyncError("algolia.json is not valid JSON") from e
    if not isinstance(records, list):
        raise IndexSyncError("algolia.json must contain a JSON array")
    return records


async def sync_search_index(
    index: SearchIndex, http: httpx.AsyncClient, site_url: str
) -> SyncResult | SyncFailure:
    """Replace the hosted index with the site's current notes export.

    Args:
        index: Write-capable index handle
        http: Outbound HTTP client
        site_url: Origin of the deployed site

    Returns:
        SyncResult with the replaced record count and elapsed time, or
        SyncFailure describing what went wrong
    """
    started = time.monotonic()
    try:
        records = await fetch_notes_export(http, site_url)
        object_count = await index.replace_all(records)
    except Exception as e:
        logger.error("index_sync_failed", extra={"site_url": site_url, "error": str(e)}, exc_info=True)
        return SyncFailure(error=str(e))

    duration_ms = int((time.monotonic() - started) * 1000)
    logger.info(
        "index_sync_completed",
        extra={"object_count": object_count, "duration_ms": duration_ms},
    )
    return SyncResult(object_count=object_count, duration=f"{duration_ms}ms")
