"""Ordering and relevance ranking for event search.

Relevance is a discrete tier rather than a weighted score: the first field in
RANK_TABLE that contains the query decides the rank of the row.
"""

from dataclasses import dataclass
from enum import Enum

from sqlalchemy import Float, Label, UnaryExpression, case, literal_column

from festival_finder.models import Event
from festival_finder.search.predicates import contains_ignore_case


class SortBy(str, Enum):
    """Recognized sort keys."""

    DATE = "date"
    RELEVANCE = "relevance"


class SortOrder(str, Enum):
    """Recognized sort directions."""

    ASC = "asc"
    DESC = "desc"


RANK_TABLE: tuple[tuple[str, float], ...] = (
    ("name", 1.0),
    ("description", 0.8),
    ("style", 0.5),
    ("city", 0.6),
    ("country", 0.4),
)
"""Fields tested in order for a relevance match, with the rank each awards.

Evaluation order is not rank order: style is tested before city, so an event
matching both style and city ranks 0.5.
"""

NO_MATCH_RANK: float = 0.0
"""Rank of rows matching no field, and of every row when sorting by date."""

SEARCH_RANK_LABEL = "search_rank"


@dataclass(frozen=True)
class EventOrdering:
    """The rank column to select and the ORDER BY keys for an event search."""

    rank: Label
    order_by: tuple[UnaryExpression, ...]


def _rank_constant(value: float):
    return literal_column(repr(float(value)), Float)


def relevance_rank(query: str) -> Label:
    """Build the relevance tier expression for a query.

    Args:
        query: Non-empty search text.

    Returns:
        Labelled CASE expression yielding a value from RANK_TABLE, or
        NO_MATCH_RANK.
    """
    whens = [
        (contains_ignore_case(getattr(Event, field), query), _rank_constant(rank))
        for field, rank in RANK_TABLE
    ]
    return case(*whens, else_=_rank_constant(NO_MATCH_RANK)).label(SEARCH_RANK_LABEL)


def resolve_event_ordering(
    sort_by: str | None, sort_order: str | None, query: str | None
) -> EventOrdering:
    """Resolve the sort request into a rank column and ORDER BY keys.

    Relevance sorting with a query orders by rank descending, then start date
    ascending. Date sorting orders by start date in the requested direction.
    Relevance without a query, and unrecognized sort keys or directions,
    fall back to start date ascending. Event id is always the last key so
    pages are stable.

    Args:
        sort_by: 'relevance' or 'date'.
        sort_order: 'asc' or 'desc'; only consulted for date sorting.
        query: The free-text query, if any.

    Returns:
        EventOrdering with the rank column and ordering keys.
    """
    if sort_by == SortBy.RELEVANCE.value and query:
        rank = relevance_rank(query)
        return EventOrdering(
            rank=rank,
            order_by=(rank.desc(), Event.from_date.asc(), Event.id.asc()),
        )

    rank = _rank_constant(NO_MATCH_RANK).label(SEARCH_RANK_LABEL)
    if sort_by == SortBy.DATE.value and sort_order == SortOrder.DESC.value:
        date_key = Event.from_date.desc()
    else:
        date_key = Event.from_date.asc()
    return EventOrdering(rank=rank, order_by=(date_key, Event.id.asc()))
