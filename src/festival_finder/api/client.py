"""Client for interacting with the Festival Finder HTTP API."""

import httpx

from festival_finder.api.responses import EventDetailPayload, EventSearchPayload
from festival_finder.config import Config
from festival_finder.errors import SearchUnavailableError


class ApiClient:
    """Async client for the Festival Finder API.

    This client handles making HTTP requests to the API and parsing the
    response envelopes into payload models.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 10.0):
        """Initialize the API client.

        Args:
            base_url: API base URL, e.g. 'http://localhost:8000/api'.
                Defaults to config.
            timeout: Default timeout for HTTP requests in seconds.
        """
        self.base_url: str = (base_url or Config.API_BASE_URL).rstrip("/")
        self.timeout: float = timeout

    @staticmethod
    def _check(response: httpx.Response) -> None:
        if response.status_code == 503:
            raise SearchUnavailableError(response.json().get("error", "unavailable"))
        response.raise_for_status()

    async def search_events(
        self,
        query: str | None = None,
        city: str | None = None,
        country: str | None = None,
        page: int = 1,
        limit: int = Config.DEFAULT_PAGE_SIZE,
        sort_by: str = "relevance",
        sort_order: str = "desc",
    ) -> EventSearchPayload:
        """Search for events via the API.

        Args:
            query: Free-text search query.
            city: City filter.
            country: Country filter.
            page: 1-based page number.
            limit: Page size.
            sort_by: 'relevance' or 'date'.
            sort_order: 'asc' or 'desc'.

        Returns:
            EventSearchPayload with events, pagination and search metadata.

        Raises:
            SearchUnavailableError: If the API reports the database unavailable.
            httpx.HTTPStatusError: If the API returns another HTTP error status.
            httpx.RequestError: For network-related issues.
        """
        endpoint = f"{self.base_url}/search/events"
        params = {
            "query": query or "",
            "city": city or "",
            "country": country or "",
            "page": page,
            "limit": limit,
            "sortBy": sort_by,
            "sortOrder": sort_order,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(endpoint, params=params)
            self._check(response)
            return EventSearchPayload.model_validate(response.json()["data"])

    async def get_event(self, event_id: int) -> EventDetailPayload | None:
        """Retrieve an event by ID via the API.

        Args:
            event_id: The event ID.

        Returns:
            EventDetailPayload if found, None otherwise.

        Raises:
            httpx.HTTPStatusError: If the API returns an error (except 404).
            httpx.RequestError: For network-related issues.
        """
        endpoint = f"{self.base_url}/events/{event_id}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(endpoint)

            if response.status_code == 404:
                return None

            self._check(response)
            return EventDetailPayload.model_validate(response.json()["data"])
