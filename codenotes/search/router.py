"""FastAPI router for the server-rendered search page."""

import asyncio

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from codenotes.config import Settings, get_settings
from codenotes.dependencies import get_http_client, logger
from codenotes.search.index import SearchIndex, get_search_index
from codenotes.search.render import render_search_page
from codenotes.search.tools import fetch_tag_list, run_search

router = APIRouter(tags=["search"])


@router.get("/search/", response_class=HTMLResponse)
async def search_page(
    request: Request,
    query: str = Query(default=""),
    index: SearchIndex = Depends(get_search_index),
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render search results for ``query``.

    Always answers 200 with a full page; index or tag-list failures only
    reduce what the page shows.
    """
    logger.info("search_request_received", extra={"query": query})
    base_url = settings.site_url or str(request.base_url)
    hits, tag_list = await asyncio.gather(
        run_search(index, query),
        fetch_tag_list(http, base_url),
    )
    html = render_search_page(query, hits, tag_list, settings)
    return HTMLResponse(
        content=html,
        headers={"Cache-Control": "no-cache"},
        media_type="text/html; charset=UTF-8",
    )
