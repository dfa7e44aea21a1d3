"""Search package for festival_finder.

This package contains the search core: the filter predicate builder, the
relevance rank resolver, the paginated executor, the engine composing them and
the service layer used by the HTTP API.
"""

from festival_finder.models import EventResult, EventSearchResponse
from festival_finder.search.engine import SearchEngine
from festival_finder.search.predicates import EventFilter
from festival_finder.search.service import Service

__all__ = [
    "EventFilter",
    "EventResult",
    "EventSearchResponse",
    "SearchEngine",
    "Service",
]
