"""FastAPI router for the deploy-succeeded webhook."""

import secrets

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from codenotes.config import Settings, get_settings
from codenotes.dependencies import get_http_client, logger
from codenotes.search.index import SearchIndex, get_admin_index
from codenotes.sync.models import SyncResult
from codenotes.sync.tools import sync_search_index

router = APIRouter(tags=["sync"])


def verify_webhook_secret(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """Reject calls that do not carry the configured bearer token.

    No secret configured means the webhook is open.

    Raises:
        HTTPException: 401 when the Authorization header does not match
    """
    if not settings.webhook_secret:
        return
    provided = request.headers.get("Authorization", "")
    expected = f"Bearer {settings.webhook_secret}"
    if not secrets.compare_digest(provided.encode(), expected.encode()):
        logger.warning("webhook_unauthorized", extra={"client": getattr(request.client, "host", None)})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


@router.post("/deploy-succeeded", dependencies=[Depends(verify_webhook_secret)])
async def deploy_succeeded(
    index: SearchIndex = Depends(get_admin_index),
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Refresh the hosted index after a deploy.

    Returns 200 with the replaced record count, or 500 with the error.
    """
    logger.info("deploy_webhook_received", extra={"site_url": settings.site_url})
    result = await sync_search_index(index, http, settings.site_url)
    status_code = (
        status.HTTP_200_OK if isinstance(result, SyncResult) else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(status_code=status_code, content=result.model_dump(by_alias=True))
