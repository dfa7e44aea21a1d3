"""Tests for the event search predicate builder.

These tests verify which events each filter combination selects and that user
input only ever reaches the database as bound parameters.
"""

from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from festival_finder.models import Event, SearchParams
from festival_finder.search.predicates import (
    EventFilter,
    build_event_predicate,
    build_text_predicate,
)


async def _matching_names(session, event_filter: EventFilter) -> set[str]:
    statement = select(Event.name).where(build_event_predicate(event_filter))
    return set((await session.scalars(statement)).all())


class TestEventFilter:
    """Tests for EventFilter construction."""

    def test_from_params_copies_filters(self):
        """Test that normalized params map onto the filter."""
        params = SearchParams(
            query="blues", city="Berlin", teachers="Damon Stone, Joanna Lucero"
        )

        event_filter = EventFilter.from_params(params)

        assert event_filter.query == "blues"
        assert event_filter.city == "Berlin"
        assert event_filter.country is None
        assert event_filter.teachers == ("Damon Stone", "Joanna Lucero")
        assert event_filter.musicians == ()

    def test_is_empty(self):
        """Test that a filter with no values is empty."""
        assert EventFilter().is_empty
        assert not EventFilter(country="Germany").is_empty
        assert not EventFilter(musicians=("Dana Swing",)).is_empty


class TestBuildEventPredicate:
    """Tests for build_event_predicate against a seeded database."""

    async def test_empty_filter_matches_all(self, seeded_engine, async_db_session):
        """Test that no filters match every event."""
        names = await _matching_names(async_db_session, EventFilter())
        assert len(names) == 11

    async def test_empty_strings_match_all(self, seeded_engine, async_db_session):
        """Test that empty strings contribute no condition."""
        names = await _matching_names(
            async_db_session, EventFilter(query="", city="", country="")
        )
        assert len(names) == 11

    async def test_query_matches_any_text_field(self, seeded_engine, async_db_session):
        """Test that the query is matched against name, description and more."""
        names = await _matching_names(async_db_session, EventFilter(query="mountain"))
        assert names == {"Mountain Blues", "Valley Stomp"}

    async def test_query_matches_style(self, seeded_engine, async_db_session):
        """Test that the query matches the style column."""
        names = await _matching_names(async_db_session, EventFilter(query="balboa"))
        assert names == {"Valley Stomp"}

    async def test_query_is_substring_not_word(self, seeded_engine, async_db_session):
        """Test that partial words match."""
        names = await _matching_names(async_db_session, EventFilter(query="Swi"))
        assert names == {"Desert Swing"}

    async def test_city_filter(self, seeded_engine, async_db_session):
        """Test the case-insensitive city filter."""
        names = await _matching_names(async_db_session, EventFilter(city="berlin"))
        assert len(names) == 7
        assert all(name.startswith("Berlin Social") for name in names)

    async def test_country_filter(self, seeded_engine, async_db_session):
        """Test the case-insensitive country filter."""
        names = await _matching_names(async_db_session, EventFilter(country="KINGDOM"))
        assert names == {"Stone Jazz"}

    async def test_filters_are_anded(self, seeded_engine, async_db_session):
        """Test that query and location filters must all hold."""
        names = await _matching_names(
            async_db_session, EventFilter(query="blues", country="France")
        )
        assert names == set()

        names = await _matching_names(
            async_db_session, EventFilter(query="blues", country="Austria")
        )
        assert names == {"Mountain Blues"}

    async def test_teacher_filter(self, seeded_engine, async_db_session):
        """Test that events must feature one of the named teachers."""
        names = await _matching_names(
            async_db_session, EventFilter(teachers=("damon stone", "Mike Legett"))
        )
        assert names == {"Mountain Blues", "Stone Jazz"}

    async def test_teacher_filter_requires_exact_name(
        self, seeded_engine, async_db_session
    ):
        """Test that teacher names are compared whole, not as substrings."""
        names = await _matching_names(async_db_session, EventFilter(teachers=("Damon",)))
        assert names == set()

    async def test_musician_filter(self, seeded_engine, async_db_session):
        """Test that events must feature one of the named musicians."""
        names = await _matching_names(
            async_db_session, EventFilter(musicians=("Dana Swing",))
        )
        assert names == {"Desert Swing"}

    async def test_like_wildcards_match_literally(
        self, seeded_engine, async_db_session
    ):
        """Test that % and _ in user input are not treated as wildcards."""
        assert await _matching_names(async_db_session, EventFilter(query="%")) == set()
        assert await _matching_names(async_db_session, EventFilter(city="_")) == set()


class TestParameterBinding:
    """Tests that user input is bound, never interpolated."""

    def test_query_is_bound_parameter(self):
        """Test that hostile input only appears among the bind values."""
        hostile = "'; DROP TABLE events; --"
        statement = select(Event.id).where(
            build_event_predicate(EventFilter(query=hostile, city=hostile))
        )

        compiled = statement.compile(dialect=postgresql.dialect())

        assert "DROP TABLE" not in str(compiled)
        assert any("DROP TABLE" in str(v) for v in compiled.params.values())

    def test_text_predicate_covers_each_column(self):
        """Test that build_text_predicate tests every given column."""
        predicate = build_text_predicate([Event.name, Event.city], "jazz")
        sql = str(predicate.compile(dialect=postgresql.dialect()))

        assert "events.name" in sql
        assert "events.city" in sql
        assert " OR " in sql
