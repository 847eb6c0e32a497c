"""FastAPI application entry point."""

from fastapi import FastAPI

from codenotes.config import get_settings
from codenotes.dependencies import logger
from codenotes.search import router as search_router
from codenotes.sync import router as sync_router

settings = get_settings()

app = FastAPI(title="Code Notes", version="0.1.0")

app.include_router(search_router.router)
app.include_router(sync_router.router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "0.1.0",
        "index": settings.algolia_index,
    }


logger.info("app_startup", extra={"host": settings.host, "port": settings.port})
