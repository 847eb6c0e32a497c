"""Shared pytest fixtures."""

import os
from collections.abc import AsyncIterator, Callable, Iterator
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest
from dotenv import load_dotenv

# Load environment variables before importing app modules
load_dotenv()

# Set test defaults if not provided
os.environ.setdefault("ALGOLIA_APP", "TESTAPP")
os.environ.setdefault("ALGOLIA_SEARCH_KEY", "search-key")
os.environ.setdefault("ALGOLIA_ADMIN_KEY", "admin-key")
os.environ.setdefault("ALGOLIA_INDEX", "notes-test")
os.environ.setdefault("SITE_URL", "https://notes.test")

from fastapi.testclient import TestClient  # noqa: E402

from codenotes.config import Settings, get_settings  # noqa: E402
from codenotes.dependencies import ContentClient, get_http_client  # noqa: E402
from codenotes.main import app  # noqa: E402
from codenotes.search.index import SearchIndex, get_admin_index, get_search_index  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]


def write_note(folder: Path, name: str, frontmatter: str, body: str = "Body text.") -> Path:
    """Write a markdown note with the given frontmatter block."""
    path = folder / name
    path.write_text(f"---\n{frontmatter.strip()}\n---\n{body}\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_content(tmp_path: Path) -> Path:
    """Create a content directory with published, untagged and draft notes."""
    notes = tmp_path / "notes"
    notes.mkdir()
    write_note(
        notes,
        "git-rebase.md",
        """
title: Git rebase onto
tags:
  - git
  - cli
created: 2024-03-05
emoji: 🌳
""",
        "# Git rebase onto\n\nMove a branch.",
    )
    write_note(
        notes,
        "git-stash.md",
        """
title: Git stash
tags: [git]
created: 2024-05-01T10:00:00+00:00
""",
    )
    write_note(
        notes,
        "scratch.md",
        """
title: Scratch pad
created: 2023-01-10
""",
    )
    write_note(
        notes,
        "wip.md",
        """
title: Work in progress
tags: [rust, git]
draft: true
created: 2024-06-01
""",
    )
    return notes


@pytest.fixture
def content_client(sample_content: Path) -> ContentClient:
    """ContentClient over the sample content directory."""
    return ContentClient(content_path=sample_content)


@pytest.fixture
def mock_index() -> AsyncMock:
    """Search index double; set return values per test."""
    index = AsyncMock(spec=SearchIndex)
    index.search.return_value = []
    index.replace_all.return_value = 0
    return index


def http_client(handler: Handler) -> httpx.AsyncClient:
    """Create an AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a webhook secret configured."""
    return Settings(
        algolia_app="TESTAPP",
        algolia_search_key="search-key",
        algolia_admin_key="admin-key",
        algolia_index="notes-test",
        site_url="https://notes.test",
        webhook_secret="s3cret",
    )


@pytest.fixture
def make_client(
    mock_index: AsyncMock, test_settings: Settings
) -> Iterator[Callable[[Handler], TestClient]]:
    """Factory for a TestClient whose outbound calls are all faked.

    The search index is ``mock_index`` and outbound HTTP is answered by the
    handler passed to the factory.
    """

    def _make(handler: Handler) -> TestClient:
        async def _http() -> AsyncIterator[httpx.AsyncClient]:
            async with http_client(handler) as client:
                yield client

        app.dependency_overrides[get_http_client] = _http
        app.dependency_overrides[get_search_index] = lambda: mock_index
        app.dependency_overrides[get_admin_index] = lambda: mock_index
        app.dependency_overrides[get_settings] = lambda: test_settings
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def make_http() -> Callable[[Handler], httpx.AsyncClient]:
    """Factory for an AsyncClient answered by a handler function."""
    return http_client
