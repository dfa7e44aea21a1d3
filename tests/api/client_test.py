"""Tests for the API client module.

These tests verify the ApiClient class for interacting with the Festival
Finder HTTP API.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from festival_finder.api.client import ApiClient
from festival_finder.api.responses import EventDetailPayload, EventSearchPayload
from festival_finder.errors import SearchUnavailableError


def _mock_async_client(response):
    mock_async_client = AsyncMock()
    mock_async_client.get = AsyncMock(return_value=response)
    mock_async_client.__aenter__ = AsyncMock(return_value=mock_async_client)
    mock_async_client.__aexit__ = AsyncMock(return_value=None)
    return mock_async_client


def _mock_response(status_code: int, body: dict):
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = body
    mock_response.raise_for_status = MagicMock()
    return mock_response


class TestApiClientInit:
    """Tests for ApiClient initialization."""

    def test_init_default_timeout(self):
        """Test default timeout value."""
        client = ApiClient()
        assert client.timeout == 10.0

    def test_init_custom_base_url(self):
        """Test that a trailing slash is stripped from the base URL."""
        client = ApiClient(base_url="http://festivals.test/api/", timeout=3.0)

        assert client.base_url == "http://festivals.test/api"
        assert client.timeout == 3.0

    def test_init_sets_base_url_from_config(self):
        """Test that the base URL defaults to Config."""
        with patch("festival_finder.api.client.Config") as mock_config:
            mock_config.API_BASE_URL = "http://configured.test/api"
            assert ApiClient().base_url == "http://configured.test/api"


class TestApiClientSearchEvents:
    """Tests for ApiClient.search_events method."""

    @pytest.fixture
    def client(self):
        """Create an ApiClient instance for testing."""
        return ApiClient(base_url="http://festivals.test/api")

    @pytest.fixture
    def mock_search_body(self):
        """Create a mock API search response body."""
        return {
            "success": True,
            "data": {
                "events": [
                    {
                        "id": "1",
                        "name": "Mountain Blues",
                        "startDate": "2025-03-14",
                        "endDate": "2025-03-16",
                        "city": "Innsbruck",
                        "country": "Austria",
                        "searchRank": 1.0,
                    }
                ],
                "pagination": {
                    "page": 1,
                    "limit": 10,
                    "total": 1,
                    "totalPages": 1,
                    "hasNext": False,
                    "hasPrev": False,
                },
                "searchMeta": {"query": "Mountain", "processingTimeMs": 3},
            },
            "timestamp": "2025-01-01T00:00:00+00:00",
        }

    async def test_search_success(self, client, mock_search_body):
        """Test successful search request."""
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_async_client(
                _mock_response(200, mock_search_body)
            )

            response = await client.search_events(query="Mountain", limit=10)

            assert isinstance(response, EventSearchPayload)
            assert response.pagination.total == 1
            assert response.events[0].name == "Mountain Blues"
            assert response.events[0].search_rank == 1.0
            assert response.search_meta["processingTimeMs"] == 3

    async def test_search_passes_parameters(self, client, mock_search_body):
        """Test that search passes the API's query parameters."""
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_async_client = _mock_async_client(
                _mock_response(200, mock_search_body)
            )
            mock_client_class.return_value = mock_async_client

            await client.search_events(
                query="blues",
                city="Berlin",
                page=2,
                limit=5,
                sort_by="date",
                sort_order="asc",
            )

            mock_async_client.get.assert_called_once_with(
                "http://festivals.test/api/search/events",
                params={
                    "query": "blues",
                    "city": "Berlin",
                    "country": "",
                    "page": 2,
                    "limit": 5,
                    "sortBy": "date",
                    "sortOrder": "asc",
                },
            )

    async def test_search_unavailable(self, client):
        """Test that a 503 raises SearchUnavailableError."""
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_async_client(
                _mock_response(503, {"success": False, "error": "down"})
            )

            with pytest.raises(SearchUnavailableError, match="down"):
                await client.search_events(query="blues")

    async def test_search_http_error(self, client):
        """Test that other HTTP errors are raised."""
        mock_response = _mock_response(500, {"success": False, "error": "boom"})
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Server Error", request=MagicMock(), response=MagicMock()
        )
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_async_client(mock_response)

            with pytest.raises(httpx.HTTPStatusError):
                await client.search_events(query="blues")


class TestApiClientGetEvent:
    """Tests for ApiClient.get_event method."""

    @pytest.fixture
    def client(self):
        """Create an ApiClient instance for testing."""
        return ApiClient(base_url="http://festivals.test/api")

    async def test_get_event_success(self, client):
        """Test retrieving an event by ID."""
        body = {
            "success": True,
            "data": {
                "id": "1",
                "name": "Mountain Blues",
                "startDate": "2025-03-14",
                "teachers": [{"id": "1", "name": "Damon Stone"}],
            },
        }
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_async_client = _mock_async_client(_mock_response(200, body))
            mock_client_class.return_value = mock_async_client

            event = await client.get_event(1)

            assert isinstance(event, EventDetailPayload)
            assert event.teachers[0].name == "Damon Stone"
            mock_async_client.get.assert_called_once_with(
                "http://festivals.test/api/events/1"
            )

    async def test_get_event_not_found(self, client):
        """Test that a 404 returns None."""
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_async_client(
                _mock_response(404, {"success": False, "error": "Event not found"})
            )

            assert await client.get_event(9999) is None
