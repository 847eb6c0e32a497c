"""Shared dependencies: ContentClient, HTTP client and structured logger."""

import json
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import httpx

from codenotes.config import get_settings

# Attributes every LogRecord carries; anything else was passed via `extra`.
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }
        data.update({k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS})
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def setup_logging() -> logging.Logger:
    """Configure and return the application logger."""
    settings = get_settings()
    logger = logging.getLogger("codenotes")
    logger.setLevel(getattr(logging, settings.log_level.upper()))
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


logger = setup_logging()


class ContentError(Exception):
    """Base exception for content directory operations."""

    pass


class ContentNotFoundError(ContentError):
    """Raised when a file is not found in the content directory."""

    pass


class ContentSecurityError(ContentError):
    """Raised when a path escapes the content directory."""

    pass


class IndexSyncError(Exception):
    """Raised when the search index cannot be refreshed from the notes export."""

    pass


@dataclass
class ContentClient:
    """Read-only access to the directory of note documents."""

    content_path: Path

    def _validate_path(self, relative_path: str) -> Path:
        """Validate and resolve a path within the content directory.

        Args:
            relative_path: Relative path within the content directory

        Returns:
            Resolved absolute path

        Raises:
            ContentSecurityError: If path traversal is detected
        """
        full_path = (self.content_path / relative_path).resolve()
        if not full_path.is_relative_to(self.content_path.resolve()):
            raise ContentSecurityError(f"Path traversal detected: {relative_path}")
        return full_path

    async def read_file(self, path: str) -> str:
        """Read a file from the content directory.

        Args:
            path: Relative path to file

        Returns:
            File content as string

        Raises:
            ContentNotFoundError: If file does not exist
        """
        full_path = self._validate_path(path)
        if not full_path.exists():
            raise ContentNotFoundError(f"File not found: {path}")
        return full_path.read_text(encoding="utf-8")

    async def modified_at(self, path: str) -> datetime:
        """Return the file's modification time in UTC."""
        full_path = self._validate_path(path)
        if not full_path.exists():
            raise ContentNotFoundError(f"File not found: {path}")
        return datetime.fromtimestamp(full_path.stat().st_mtime, tz=UTC)

    async def list_files(self, pattern: str = "*.md") -> list[str]:
        """List files matching a pattern, sorted by relative path."""
        if not self.content_path.exists():
            return []
        return sorted(
            f.relative_to(self.content_path).as_posix()
            for f in self.content_path.rglob(pattern)
            if f.is_file()
        )


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency provider for an outbound HTTP client.

    One client per request; it is closed when the response has been sent.
    """
    async with httpx.AsyncClient(timeout=get_settings().http_timeout) as client:
        yield client
