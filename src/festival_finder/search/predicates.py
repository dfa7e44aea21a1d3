"""Filter predicates for event and people search.

Predicates are SQLAlchemy expressions, so every user-supplied value reaches the
database as a bound parameter. LIKE wildcards in user input are escaped and
match literally.
"""

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import ColumnElement, and_, func, or_, true

from festival_finder.models import Event, Musician, SearchParams, Teacher

EVENT_TEXT_FIELDS: tuple[str, ...] = ("name", "description", "city", "country", "style")
"""Event columns matched by the free-text query."""


@dataclass(frozen=True)
class EventFilter:
    """Optional filters applied to an event search.

    Empty strings and empty name lists contribute no condition.
    """

    query: str | None = None
    city: str | None = None
    country: str | None = None
    teachers: tuple[str, ...] = ()
    musicians: tuple[str, ...] = ()

    @classmethod
    def from_params(cls, params: SearchParams) -> "EventFilter":
        """Build a filter from normalized search parameters."""
        return cls(
            query=params.query,
            city=params.city,
            country=params.country,
            teachers=tuple(params.teachers),
            musicians=tuple(params.musicians),
        )

    @property
    def is_empty(self) -> bool:
        """True when the filter matches every event."""
        return not (
            self.query or self.city or self.country or self.teachers or self.musicians
        )


def contains_ignore_case(column, value: str) -> ColumnElement[bool]:
    """Case-insensitive substring test with LIKE wildcards escaped."""
    return column.icontains(value, autoescape=True)


def build_text_predicate(columns: Iterable, query: str) -> ColumnElement[bool]:
    """Match rows where any of the columns contains the query.

    Args:
        columns: Columns to test. NULL columns never match.
        query: Substring to look for, compared case-insensitively.

    Returns:
        A disjunction of substring tests.
    """
    return or_(*(contains_ignore_case(column, query) for column in columns))


def build_event_predicate(event_filter: EventFilter) -> ColumnElement[bool]:
    """Combine the filter's conditions into a single WHERE predicate.

    The free-text query matches name, description, city, country or style.
    City and country are separate substring filters. Teacher and musician
    names require the event to feature at least one of the named people
    (exact, case-insensitive name match). All present conditions are ANDed;
    an empty filter yields a tautology.

    Args:
        event_filter: The filters to apply.

    Returns:
        Boolean SQL expression over the events table.
    """
    clauses: list[ColumnElement[bool]] = []

    if event_filter.query:
        columns = [getattr(Event, field) for field in EVENT_TEXT_FIELDS]
        clauses.append(build_text_predicate(columns, event_filter.query))

    if event_filter.city:
        clauses.append(contains_ignore_case(Event.city, event_filter.city))

    if event_filter.country:
        clauses.append(contains_ignore_case(Event.country, event_filter.country))

    linked = [
        Event.teachers.any(func.lower(Teacher.name) == name.lower())
        for name in event_filter.teachers
    ]
    linked += [
        Event.musicians.any(func.lower(Musician.name) == name.lower())
        for name in event_filter.musicians
    ]
    if linked:
        clauses.append(or_(*linked))

    if not clauses:
        return true()
    return and_(*clauses)
