"""Core search engine for festival events, teachers and musicians.

This module owns the database engine and composes the predicate builder,
rank resolver and paginated executor into one query per resource.
"""

import asyncio
import logging
import math

from sqlalchemy import select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import selectinload

from festival_finder.config import Config
from festival_finder.models import (
    Event,
    EventDetail,
    EventPage,
    EventResult,
    Musician,
    MusicianResult,
    Teacher,
    TeacherResult,
)
from festival_finder.search.executor import (
    PageResult,
    count_statement,
    fetch_page,
    translate_errors,
)
from festival_finder.search.predicates import (
    EventFilter,
    build_event_predicate,
    build_text_predicate,
    contains_ignore_case,
)
from festival_finder.search.ranking import resolve_event_ordering

logger = logging.getLogger(__name__)


def _engine_options(db_url: str) -> dict:
    """Pool settings for server databases; SQLite manages its own pool."""
    if make_url(db_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": Config.POOL_SIZE,
        "pool_timeout": Config.POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


class SearchEngine:
    """Core search engine over the festival database.

    Every method opens its own session and releases it before returning.
    """

    def __init__(
        self,
        db_url: str | None = None,
        engine: AsyncEngine | None = None,
        query_timeout: float | None = None,
    ):
        """Initialize the search engine.

        Args:
            db_url: Database URL. Defaults to configured URL.
            engine: Existing async engine to use instead of creating one.
            query_timeout: Seconds each read may take. Defaults to config.
        """
        if engine is not None:
            self.db_url = engine.url.render_as_string(hide_password=True)
            self.engine: AsyncEngine = engine
        else:
            self.db_url = db_url or Config.DATABASE_URL
            self.engine = create_async_engine(
                self.db_url, **_engine_options(self.db_url)
            )
        self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
        self.query_timeout = (
            query_timeout if query_timeout is not None else Config.QUERY_TIMEOUT
        )

    async def search_events(
        self,
        event_filter: EventFilter,
        sort_by: str = "relevance",
        sort_order: str = "desc",
        limit: int = Config.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> EventPage:
        """Search events matching a filter.

        Args:
            event_filter: Text, location and people filters.
            sort_by: 'relevance' or 'date'.
            sort_order: 'asc' or 'desc'.
            limit: Maximum number of events to return.
            offset: Number of matching events to skip.

        Returns:
            EventPage with the total match count and one page of events.
        """
        predicate = build_event_predicate(event_filter)
        ordering = resolve_event_ordering(sort_by, sort_order, event_filter.query)
        statement = (
            select(Event, ordering.rank).where(predicate).order_by(*ordering.order_by)
        )

        page = await fetch_page(
            self.sessionmaker,
            statement,
            count_statement(Event, predicate),
            limit=limit,
            offset=offset,
            timeout=self.query_timeout,
        )
        logger.debug(
            f"Event search {event_filter} matched {page.total}, "
            f"returning {len(page.rows)}"
        )
        return EventPage(
            total=page.total,
            rows=[
                self._to_event_result(event, rank, page.total)
                for event, rank in page.rows
            ],
        )

    async def search_teachers(
        self, query: str, limit: int = Config.PEOPLE_PAGE_SIZE, offset: int = 0
    ) -> tuple[int, list[TeacherResult]]:
        """Search teachers by name or bio.

        Args:
            query: Substring to look for.
            limit: Maximum number of teachers to return.
            offset: Number of matching teachers to skip.

        Returns:
            Tuple of total match count and one page of teachers.
        """
        page = await self._search_people(Teacher, query, limit, offset)
        return page.total, [TeacherResult.model_validate(t) for (t,) in page.rows]

    async def search_musicians(
        self, query: str, limit: int = Config.PEOPLE_PAGE_SIZE, offset: int = 0
    ) -> tuple[int, list[MusicianResult]]:
        """Search musicians by name or bio.

        Args:
            query: Substring to look for.
            limit: Maximum number of musicians to return.
            offset: Number of matching musicians to skip.

        Returns:
            Tuple of total match count and one page of musicians.
        """
        page = await self._search_people(Musician, query, limit, offset)
        return page.total, [MusicianResult.model_validate(m) for (m,) in page.rows]

    async def get_event(self, event_id: int) -> EventDetail | None:
        """Retrieve an event with its teachers and musicians.

        Args:
            event_id: The event ID.

        Returns:
            EventDetail if found, None otherwise.
        """
        async with translate_errors():
            async with self.sessionmaker() as session:
                event = await asyncio.wait_for(
                    session.get(
                        Event,
                        event_id,
                        options=[
                            selectinload(Event.teachers),
                            selectinload(Event.musicians),
                        ],
                    ),
                    self.query_timeout,
                )
                return EventDetail.model_validate(event) if event else None

    async def suggest(self, query: str, limit: int) -> dict[str, list[str]]:
        """Collect autocomplete suggestions for a partial query.

        Args:
            query: Partial search text.
            limit: Maximum suggestions per category.

        Returns:
            Mapping of category ('events', 'teachers', 'musicians',
            'locations') to suggestion strings.
        """
        people_limit = math.ceil(limit / 2)
        event_statement = (
            select(Event.name, Event.city, Event.country)
            .where(build_text_predicate([Event.name, Event.city, Event.country], query))
            .order_by(Event.from_date.desc(), Event.id.desc())
            .limit(limit * 2)
        )
        teacher_statement = (
            select(Teacher.name)
            .where(contains_ignore_case(Teacher.name, query))
            .order_by(Teacher.id.desc())
            .limit(people_limit)
        )
        musician_statement = (
            select(Musician.name)
            .where(contains_ignore_case(Musician.name, query))
            .order_by(Musician.id.desc())
            .limit(people_limit)
        )

        async with translate_errors():
            async with self.sessionmaker() as session:
                events = (
                    await asyncio.wait_for(
                        session.execute(event_statement), self.query_timeout
                    )
                ).all()
                teachers = (
                    await asyncio.wait_for(
                        session.scalars(teacher_statement), self.query_timeout
                    )
                ).all()
                musicians = (
                    await asyncio.wait_for(
                        session.scalars(musician_statement), self.query_timeout
                    )
                ).all()

        locations: list[str] = []
        for values in (
            [city for _, city, _ in events],
            [country for _, _, country in events],
            [f"{city}, {country}" for _, city, country in events if city and country],
        ):
            for value in values:
                if value and value not in locations:
                    locations.append(value)

        return {
            "events": [name for name, _, _ in events][:limit],
            "teachers": list(teachers),
            "musicians": list(musicians),
            "locations": locations[:limit],
        }

    async def ping(self) -> None:
        """Run a trivial query to check connectivity.

        Raises:
            SearchUnavailableError: If the database cannot be reached.
        """
        async with translate_errors():
            async with self.sessionmaker() as session:
                await asyncio.wait_for(session.execute(select(1)), self.query_timeout)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()

    async def _search_people(
        self, model: type[Teacher] | type[Musician], query: str, limit: int, offset: int
    ) -> PageResult:
        predicate = build_text_predicate([model.name, model.bio], query)
        statement = select(model).where(predicate).order_by(model.name, model.id)
        return await fetch_page(
            self.sessionmaker,
            statement,
            count_statement(model, predicate),
            limit=limit,
            offset=offset,
            timeout=self.query_timeout,
        )

    def _to_event_result(self, event: Event, rank: float, total: int) -> EventResult:
        """Convert an Event ORM object to EventResult.

        Args:
            event: Event ORM object.
            rank: Relevance rank computed for the row.
            total: Total matching rows for the search.

        Returns:
            EventResult pydantic model.
        """
        return EventResult(
            id=event.id,
            name=event.name,
            description=event.description,
            from_date=event.from_date,
            to_date=event.to_date,
            city=event.city,
            country=event.country,
            website=event.website,
            style=event.style,
            image_url=event.image_url,
            ai_quality_score=event.ai_quality_score,
            ai_completeness_score=event.ai_completeness_score,
            extraction_method=event.extraction_method,
            created_at=event.created_at,
            updated_at=event.updated_at,
            total_count=total,
            search_rank=float(rank or 0.0),
        )
