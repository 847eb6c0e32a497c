"""Tests for the deploy webhook and index sync job."""

import json
from collections.abc import Callable
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from codenotes.dependencies import IndexSyncError
from codenotes.sync.models import SyncFailure, SyncResult
from codenotes.sync.tools import NOTES_EXPORT_PATH, fetch_notes_export, sync_search_index

RECORDS = [
    {"title": "Git stash", "url": "/notes/git-stash/", "date": "2024-05-01", "tags": ["git"]},
    {"title": "Scratch pad", "url": "/notes/scratch/", "date": "2023-01-10", "tags": []},
]


def export_handler(request: httpx.Request) -> httpx.Response:
    """Serve the notes export."""
    if request.url.path == NOTES_EXPORT_PATH:
        return httpx.Response(200, json=RECORDS)
    return httpx.Response(404)


# =============================================================================
# Fetch Tests
# =============================================================================


class TestFetchNotesExport:
    """Tests for downloading the notes export."""

    @pytest.mark.asyncio
    async def test_fetch(self, make_http: Callable) -> None:
        """Test the export is read from the site's well-known path."""
        async with make_http(export_handler) as http:
            assert await fetch_notes_export(http, "https://notes.test/") == RECORDS

    @pytest.mark.asyncio
    async def test_non_success_status(self, make_http: Callable) -> None:
        """Test non-2xx responses raise with the status code."""
        async with make_http(lambda request: httpx.Response(503)) as http:
            with pytest.raises(IndexSyncError, match="Failed to fetch algolia.json: 503"):
                await fetch_notes_export(http, "https://notes.test")

    @pytest.mark.asyncio
    async def test_not_a_list(self, make_http: Callable) -> None:
        """Test an object payload is rejected."""
        async with make_http(lambda request: httpx.Response(200, json={"a": 1})) as http:
            with pytest.raises(IndexSyncError, match="JSON array"):
                await fetch_notes_export(http, "https://notes.test")

    @pytest.mark.asyncio
    async def test_invalid_json(self, make_http: Callable) -> None:
        """Test a non-JSON body is rejected."""
        async with make_http(lambda request: httpx.Response(200, text="not json")) as http:
            with pytest.raises(IndexSyncError, match="not valid JSON"):
                await fetch_notes_export(http, "https://notes.test")

    @pytest.mark.asyncio
    async def test_network_error(self, make_http: Callable) -> None:
        """Test transport failures become IndexSyncError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_http(handler) as http:
            with pytest.raises(IndexSyncError):
                await fetch_notes_export(http, "https://notes.test")


# =============================================================================
# Sync Job Tests
# =============================================================================


class TestSyncSearchIndex:
    """Tests for replacing the hosted index."""

    @pytest.mark.asyncio
    async def test_success(self, make_http: Callable, mock_index: AsyncMock) -> None:
        """Test objectCount matches the number of exported records."""
        mock_index.replace_all.return_value = len(RECORDS)

        async with make_http(export_handler) as http:
            result = await sync_search_index(mock_index, http, "https://notes.test")

        assert isinstance(result, SyncResult)
        assert result.object_count == 2
        assert result.duration.endswith("ms")
        mock_index.replace_all.assert_awaited_once_with(RECORDS)

    @pytest.mark.asyncio
    async def test_fetch_failure(self, make_http: Callable, mock_index: AsyncMock) -> None:
        """Test a failed fetch never touches the index."""
        async with make_http(lambda request: httpx.Response(404)) as http:
            result = await sync_search_index(mock_index, http, "https://notes.test")

        assert isinstance(result, SyncFailure)
        assert "404" in result.error
        mock_index.replace_all.assert_not_called()

    @pytest.mark.asyncio
    async def test_index_failure(self, make_http: Callable, mock_index: AsyncMock) -> None:
        """Test provider errors are reported, not raised."""
        mock_index.replace_all.side_effect = RuntimeError("quota exceeded")

        async with make_http(export_handler) as http:
            result = await sync_search_index(mock_index, http, "https://notes.test")

        assert result == SyncFailure(error="quota exceeded")

    def test_result_serialization(self) -> None:
        """Test the success payload uses the webhook's field names."""
        payload = SyncResult(object_count=3, duration="12ms").model_dump(by_alias=True)
        assert payload == {
            "success": True,
            "message": "Algolia index updated successfully",
            "objectCount": 3,
            "duration": "12ms",
        }


# =============================================================================
# Webhook Route Tests
# =============================================================================


class TestDeployWebhook:
    """Tests for POST /deploy-succeeded."""

    def test_success(self, make_client: Callable, mock_index: AsyncMock) -> None:
        """Test an authorised call replaces the index and reports the count."""
        mock_index.replace_all.return_value = len(RECORDS)
        client: TestClient = make_client(export_handler)

        response = client.post("/deploy-succeeded", headers={"Authorization": "Bearer s3cret"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["objectCount"] == 2
        assert body["duration"].endswith("ms")

    def test_wrong_secret(self, make_client: Callable, mock_index: AsyncMock) -> None:
        """Test a wrong bearer token is rejected before any work."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return export_handler(request)

        client: TestClient = make_client(handler)
        response = client.post("/deploy-succeeded", headers={"Authorization": "Bearer wrong"})

        assert response.status_code == 401
        assert requests == []
        mock_index.replace_all.assert_not_called()

    def test_missing_secret(self, make_client: Callable, mock_index: AsyncMock) -> None:
        """Test a call without Authorization is rejected."""
        client: TestClient = make_client(export_handler)
        assert client.post("/deploy-succeeded").status_code == 401
        mock_index.replace_all.assert_not_called()

    def test_open_when_no_secret_configured(
        self, make_client: Callable, mock_index: AsyncMock, test_settings
    ) -> None:
        """Test the webhook accepts any caller without a configured secret."""
        test_settings.webhook_secret = None
        mock_index.replace_all.return_value = 2
        client: TestClient = make_client(export_handler)

        assert client.post("/deploy-succeeded").status_code == 200

    def test_method_not_allowed(self, make_client: Callable, mock_index: AsyncMock) -> None:
        """Test non-POST methods get 405."""
        client: TestClient = make_client(export_handler)

        assert client.get("/deploy-succeeded").status_code == 405
        assert client.put("/deploy-succeeded").status_code == 405
        mock_index.replace_all.assert_not_called()

    def test_failure_is_500(self, make_client: Callable, mock_index: AsyncMock) -> None:
        """Test a failed sync answers 500 with the error."""
        client: TestClient = make_client(lambda request: httpx.Response(500))

        response = client.post("/deploy-succeeded", headers={"Authorization": "Bearer s3cret"})

        assert response.status_code == 500
        assert json.loads(response.text) == {
            "success": False,
            "error": "Failed to fetch algolia.json: 500",
        }
