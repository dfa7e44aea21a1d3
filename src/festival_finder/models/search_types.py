"""Type definitions for search parameters, results and responses."""

import datetime
import math
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from festival_finder.config import Config


def coerce_int(value: object, default: int) -> int:
    """Parse an integer query value, falling back to default when malformed."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _blank_to_none(value: object) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _split_names(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(name).strip() for name in value if str(name).strip()]


class SearchParams(BaseModel):
    """Normalized event search parameters.

    Malformed or out-of-range values are clamped rather than rejected:
    page is at least 1, limit lies in [1, MAX_PAGE_SIZE], empty strings
    count as absent filters.
    """

    query: Optional[str] = None
    """Free-text query matched against name, description, city, country, style."""

    city: Optional[str] = None
    """Case-insensitive substring filter on the event city."""

    country: Optional[str] = None
    """Case-insensitive substring filter on the event country."""

    teachers: list[str] = Field(default_factory=list)
    """Teacher names; events must feature at least one of them."""

    musicians: list[str] = Field(default_factory=list)
    """Musician names; events must feature at least one of them."""

    page: int = 1
    """1-based page number."""

    limit: int = Config.DEFAULT_PAGE_SIZE
    """Page size."""

    sort_by: str = "relevance"
    """'relevance' or 'date'; anything else sorts by date ascending."""

    sort_order: str = "desc"
    """'asc' or 'desc'; only applies to date sorting."""

    @field_validator("query", "city", "country", mode="before")
    @classmethod
    def _strip_filters(cls, value: object) -> Optional[str]:
        return _blank_to_none(value)

    @field_validator("teachers", "musicians", mode="before")
    @classmethod
    def _parse_names(cls, value: object) -> list[str]:
        return _split_names(value)

    @field_validator("page", mode="before")
    @classmethod
    def _clamp_page(cls, value: object) -> int:
        return max(coerce_int(value, 1), 1)

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value: object) -> int:
        limit = coerce_int(value, Config.DEFAULT_PAGE_SIZE)
        return min(max(limit, 1), Config.MAX_PAGE_SIZE)

    @field_validator("sort_by", mode="before")
    @classmethod
    def _default_sort_by(cls, value: object) -> str:
        return (_blank_to_none(value) or "relevance").lower()

    @field_validator("sort_order", mode="before")
    @classmethod
    def _default_sort_order(cls, value: object) -> str:
        return (_blank_to_none(value) or "desc").lower()

    @property
    def offset(self) -> int:
        """Number of rows skipped before this page."""
        return (self.page - 1) * self.limit


class PeopleSearchParams(BaseModel):
    """Normalized teacher or musician search parameters."""

    query: str = ""
    page: int = 1
    limit: int = Config.PEOPLE_PAGE_SIZE

    @field_validator("query", mode="before")
    @classmethod
    def _strip_query(cls, value: object) -> str:
        return _blank_to_none(value) or ""

    @field_validator("page", mode="before")
    @classmethod
    def _clamp_page(cls, value: object) -> int:
        return max(coerce_int(value, 1), 1)

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value: object) -> int:
        limit = coerce_int(value, Config.PEOPLE_PAGE_SIZE)
        return min(max(limit, 1), Config.MAX_PEOPLE_PAGE_SIZE)

    @property
    def offset(self) -> int:
        """Number of rows skipped before this page."""
        return (self.page - 1) * self.limit


class EventSummary(BaseModel):
    """Core event fields as stored in the database."""

    id: int
    name: str
    description: Optional[str] = None
    from_date: datetime.date
    to_date: Optional[datetime.date] = None
    city: Optional[str] = None
    country: Optional[str] = None
    website: Optional[str] = None
    style: Optional[str] = None
    image_url: Optional[str] = None
    ai_quality_score: Optional[float] = None
    ai_completeness_score: Optional[float] = None
    extraction_method: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class EventResult(EventSummary):
    """An event matched by a search, with its computed ranking fields."""

    total_count: int
    """Total rows matching the filter, repeated on every row of the page."""

    search_rank: float = 0.0
    """Relevance tier of the best matching field; 0.0 for date sorting."""


class EventPage(BaseModel):
    """One page of matched events plus the total match count."""

    total: int
    rows: list[EventResult]


class TeacherResult(BaseModel):
    """A teacher returned from search or attached to an event."""

    id: int
    name: str
    bio: Optional[str] = None
    website: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class MusicianResult(BaseModel):
    """A musician returned from search or attached to an event."""

    id: int
    name: str
    slug: Optional[str] = None
    bio: Optional[str] = None
    instruments: list[str] = Field(default_factory=list)
    verified: bool = False
    website: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("instruments", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return value or []

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class EventDetail(EventSummary):
    """A single event with the teachers and musicians booked for it."""

    teachers: list[TeacherResult] = Field(default_factory=list)
    musicians: list[MusicianResult] = Field(default_factory=list)


class PageInfo(BaseModel):
    """Pagination metadata shared by all paged responses."""

    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool
    processing_time_ms: Optional[int] = None

    @staticmethod
    def pagination(total: int, page: int, limit: int) -> dict:
        """Compute the pagination block for a page of results.

        Args:
            total: Number of rows matching the filter.
            page: 1-based page number.
            limit: Page size.

        Returns:
            Keyword arguments for the PageInfo fields.
        """
        total_pages = math.ceil(total / limit) if limit else 0
        return {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": total_pages,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        }


class EventSearchResponse(PageInfo):
    """Response of an event search."""

    params: SearchParams
    events: list[EventResult]


class TeacherSearchResponse(PageInfo):
    """Response of a teacher search."""

    query: str
    teachers: list[TeacherResult]


class MusicianSearchResponse(PageInfo):
    """Response of a musician search."""

    query: str
    musicians: list[MusicianResult]


class Suggestions(BaseModel):
    """Autocomplete suggestions grouped by category."""

    events: list[str] = Field(default_factory=list)
    teachers: list[str] = Field(default_factory=list)
    musicians: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
