"""Service layer for search operations."""

import logging
import time

from festival_finder.config import Config
from festival_finder.errors import InvalidQueryError, SearchError
from festival_finder.models import (
    EventDetail,
    EventSearchResponse,
    MusicianSearchResponse,
    PageInfo,
    PeopleSearchParams,
    SearchParams,
    Suggestions,
    TeacherSearchResponse,
)
from festival_finder.search.engine import SearchEngine
from festival_finder.search.predicates import EventFilter

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)


class Service:
    """Service wrapper for search operations.

    Normalizes request parameters, delegates to the engine and attaches
    pagination metadata to the results.
    """

    def __init__(self, engine: SearchEngine | None = None):
        """Initialize the search service.

        Args:
            engine: SearchEngine instance. Defaults to new engine.
        """
        self.engine = engine or SearchEngine()

    async def search(
        self, params: SearchParams | None = None, **filters
    ) -> EventSearchResponse:
        """Search for events.

        Args:
            params: Normalized search parameters. When omitted, they are built
                from the keyword arguments (query, city, country, teachers,
                musicians, page, limit, sort_by, sort_order).

        Returns:
            EventSearchResponse with one page of events and pagination data.

        Raises:
            SearchUnavailableError: If the database is unreachable.
            SearchError: For any other failure.
        """
        if params is None:
            params = SearchParams(**filters)
        start_time = time.time()

        page = await self.engine.search_events(
            EventFilter.from_params(params),
            sort_by=params.sort_by,
            sort_order=params.sort_order,
            limit=params.limit,
            offset=params.offset,
        )

        logger.info(
            f"Event search query={params.query!r} city={params.city!r} "
            f"country={params.country!r} page={params.page}: {page.total} matches"
        )
        return EventSearchResponse(
            params=params,
            events=page.rows,
            processing_time_ms=_elapsed_ms(start_time),
            **PageInfo.pagination(page.total, params.page, params.limit),
        )

    async def search_teachers(
        self, params: PeopleSearchParams | None = None, **filters
    ) -> TeacherSearchResponse:
        """Search for teachers by name or bio.

        Args:
            params: Normalized people search parameters, or keyword arguments
                (query, page, limit) to build them from.

        Returns:
            TeacherSearchResponse with one page of teachers.

        Raises:
            InvalidQueryError: If the query is shorter than the minimum length.
        """
        if params is None:
            params = PeopleSearchParams(**filters)
        self._require_query(params.query)
        start_time = time.time()

        total, teachers = await self.engine.search_teachers(
            params.query, limit=params.limit, offset=params.offset
        )
        return TeacherSearchResponse(
            query=params.query,
            teachers=teachers,
            processing_time_ms=_elapsed_ms(start_time),
            **PageInfo.pagination(total, params.page, params.limit),
        )

    async def search_musicians(
        self, params: PeopleSearchParams | None = None, **filters
    ) -> MusicianSearchResponse:
        """Search for musicians by name or bio.

        Args:
            params: Normalized people search parameters, or keyword arguments
                (query, page, limit) to build them from.

        Returns:
            MusicianSearchResponse with one page of musicians.

        Raises:
            InvalidQueryError: If the query is shorter than the minimum length.
        """
        if params is None:
            params = PeopleSearchParams(**filters)
        self._require_query(params.query)
        start_time = time.time()

        total, musicians = await self.engine.search_musicians(
            params.query, limit=params.limit, offset=params.offset
        )
        return MusicianSearchResponse(
            query=params.query,
            musicians=musicians,
            processing_time_ms=_elapsed_ms(start_time),
            **PageInfo.pagination(total, params.page, params.limit),
        )

    async def suggest(
        self, query: str | None, limit: int = Config.DEFAULT_SUGGESTION_LIMIT
    ) -> Suggestions:
        """Return autocomplete suggestions for a partial query.

        Queries shorter than the minimum length yield empty suggestions.

        Args:
            query: Partial search text.
            limit: Maximum suggestions per category, capped by config.

        Returns:
            Suggestions grouped by category.
        """
        query = (query or "").strip()
        if len(query) < Config.MIN_QUERY_LENGTH:
            return Suggestions()
        limit = min(max(limit, 1), Config.MAX_SUGGESTION_LIMIT)
        return Suggestions(**await self.engine.suggest(query, limit))

    async def get_event(self, event_id: int) -> EventDetail | None:
        """Retrieve an event by ID.

        Args:
            event_id: The event ID.

        Returns:
            EventDetail if found, None otherwise.
        """
        return await self.engine.get_event(event_id)

    async def health(self) -> bool:
        """Check whether the database answers queries.

        Returns:
            True if the database is reachable, False otherwise.
        """
        try:
            await self.engine.ping()
        except SearchError as e:
            logger.error(f"Database health check failed: {e}")
            return False
        return True

    def _require_query(self, query: str) -> None:
        if len(query) < Config.MIN_QUERY_LENGTH:
            raise InvalidQueryError(
                f"Search query must be at least {Config.MIN_QUERY_LENGTH} "
                "characters long"
            )
