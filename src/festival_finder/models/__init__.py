"""Database models and search result types for festival_finder."""

from festival_finder.models.events_db import (
    Base,
    Event,
    Musician,
    Teacher,
    event_musicians,
    event_teachers,
)
from festival_finder.models.search_types import (
    EventDetail,
    EventPage,
    EventResult,
    EventSearchResponse,
    EventSummary,
    MusicianResult,
    MusicianSearchResponse,
    PageInfo,
    PeopleSearchParams,
    SearchParams,
    Suggestions,
    TeacherResult,
    TeacherSearchResponse,
)

__all__ = [
    "Base",
    "Event",
    "EventDetail",
    "EventPage",
    "EventResult",
    "EventSearchResponse",
    "EventSummary",
    "Musician",
    "MusicianResult",
    "MusicianSearchResponse",
    "PageInfo",
    "PeopleSearchParams",
    "SearchParams",
    "Suggestions",
    "Teacher",
    "TeacherResult",
    "TeacherSearchResponse",
    "event_musicians",
    "event_teachers",
]
