"""Pydantic models and helpers shaping API responses.

Search results are renamed to the camelCase fields the web client expects,
image paths are turned into public URLs, and every payload is wrapped in the
{"success", "data", "timestamp"} envelope.
"""

import datetime
from typing import Any, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from festival_finder.models import (
    EventDetail,
    EventSearchResponse,
    EventSummary,
    MusicianResult,
    MusicianSearchResponse,
    PageInfo,
    TeacherResult,
    TeacherSearchResponse,
)
from festival_finder.util import public_image_url


class CamelModel(BaseModel):
    """Base model serializing field names in camelCase."""

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True


class EventPayload(CamelModel):
    """An event as returned by the API."""

    id: str
    """Event ID, rendered as a string."""

    name: str
    description: Optional[str] = None
    start_date: datetime.date
    end_date: Optional[datetime.date] = None
    country: Optional[str] = None
    city: Optional[str] = None
    website: Optional[str] = None
    style: Optional[str] = None
    image_url: Optional[str] = None
    """Public image URL, if the event has an image."""

    ai_quality_score: Optional[float] = None
    ai_completeness_score: Optional[float] = None
    extraction_method: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


class SearchEventPayload(EventPayload):
    """An event returned from search, with its relevance rank."""

    search_rank: float = 0.0


class TeacherPayload(CamelModel):
    """A teacher as returned by the API."""

    id: str
    name: str
    bio: Optional[str] = None
    website: Optional[str] = None
    image_url: Optional[str] = None


class MusicianPayload(CamelModel):
    """A musician as returned by the API."""

    id: str
    name: str
    slug: Optional[str] = None
    bio: Optional[str] = None
    instruments: List[str] = []
    verified: bool = False
    website: Optional[str] = None
    image_url: Optional[str] = None


class EventDetailPayload(EventPayload):
    """A single event with its teachers and musicians."""

    teachers: List[TeacherPayload] = []
    musicians: List[MusicianPayload] = []


class PaginationPayload(CamelModel):
    """Pagination block attached to every paged response."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


def _event_fields(event: EventSummary, storage_base_url: str) -> dict[str, Any]:
    return {
        "id": str(event.id),
        "name": event.name,
        "description": event.description,
        "start_date": event.from_date,
        "end_date": event.to_date,
        "country": event.country,
        "city": event.city,
        "website": event.website,
        "style": event.style,
        "image_url": public_image_url(event.image_url, storage_base_url),
        "ai_quality_score": event.ai_quality_score,
        "ai_completeness_score": event.ai_completeness_score,
        "extraction_method": event.extraction_method,
        "created_at": event.created_at,
        "updated_at": event.updated_at,
    }


def teacher_payload(teacher: TeacherResult, storage_base_url: str) -> TeacherPayload:
    """Shape a teacher for the API."""
    return TeacherPayload(
        id=str(teacher.id),
        name=teacher.name,
        bio=teacher.bio,
        website=teacher.website,
        image_url=public_image_url(teacher.image_url, storage_base_url),
    )


def musician_payload(
    musician: MusicianResult, storage_base_url: str
) -> MusicianPayload:
    """Shape a musician for the API."""
    return MusicianPayload(
        id=str(musician.id),
        name=musician.name,
        slug=musician.slug,
        bio=musician.bio,
        instruments=musician.instruments,
        verified=musician.verified,
        website=musician.website,
        image_url=public_image_url(musician.image_url, storage_base_url),
    )


def pagination_payload(page_info: PageInfo) -> PaginationPayload:
    """Extract the pagination block from a paged response."""
    return PaginationPayload(
        page=page_info.page,
        limit=page_info.limit,
        total=page_info.total,
        total_pages=page_info.total_pages,
        has_next=page_info.has_next,
        has_prev=page_info.has_prev,
    )


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def success_envelope(data: Any) -> dict[str, Any]:
    """Wrap a payload in the success envelope."""
    return {"success": True, "data": data, "timestamp": _now()}


def error_envelope(message: str) -> dict[str, Any]:
    """Build the failure envelope."""
    return {"success": False, "error": message, "timestamp": _now()}


def event_search_data(
    response: EventSearchResponse, storage_base_url: str
) -> dict[str, Any]:
    """Shape an event search response into the API data block.

    Args:
        response: Result of Service.search.
        storage_base_url: Public bucket base URL for image rewriting.

    Returns:
        Dict with 'events', 'pagination' and 'searchMeta'.
    """
    params = response.params
    events = [
        SearchEventPayload(
            **_event_fields(event, storage_base_url), search_rank=event.search_rank
        )
        for event in response.events
    ]
    return {
        "events": [_dump(event) for event in events],
        "pagination": _dump(pagination_payload(response)),
        "searchMeta": {
            "query": params.query or "",
            "sorting": {"sortBy": params.sort_by, "sortOrder": params.sort_order},
            "filters": {
                "city": params.city or "",
                "country": params.country or "",
                "teachers": params.teachers,
                "musicians": params.musicians,
            },
            "totalMatches": response.total,
            "processingTimeMs": response.processing_time_ms,
        },
    }


def event_detail_data(event: EventDetail, storage_base_url: str) -> dict[str, Any]:
    """Shape a single event with its people into the API data block."""
    payload = EventDetailPayload(
        **_event_fields(event, storage_base_url),
        teachers=[teacher_payload(t, storage_base_url) for t in event.teachers],
        musicians=[musician_payload(m, storage_base_url) for m in event.musicians],
    )
    return _dump(payload)


def teacher_search_data(
    response: TeacherSearchResponse, storage_base_url: str
) -> dict[str, Any]:
    """Shape a teacher search response into the API data block."""
    return {
        "teachers": [
            _dump(teacher_payload(t, storage_base_url)) for t in response.teachers
        ],
        "pagination": _dump(pagination_payload(response)),
        "query": response.query,
    }


def musician_search_data(
    response: MusicianSearchResponse, storage_base_url: str
) -> dict[str, Any]:
    """Shape a musician search response into the API data block."""
    return {
        "musicians": [
            _dump(musician_payload(m, storage_base_url)) for m in response.musicians
        ],
        "pagination": _dump(pagination_payload(response)),
        "query": response.query,
    }


class EventSearchPayload(CamelModel):
    """The data block of an event search response, as parsed by clients."""

    events: List[SearchEventPayload]
    pagination: PaginationPayload
    search_meta: dict[str, Any] = {}
