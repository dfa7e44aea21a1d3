"""HTTP routes for event, teacher and musician search.

Query parameters are taken as raw strings and normalized by the search
parameter models, so malformed paging values fall back to defaults instead of
failing validation.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from festival_finder.api.responses import (
    error_envelope,
    event_detail_data,
    event_search_data,
    musician_search_data,
    success_envelope,
    teacher_search_data,
)
from festival_finder.config import Config
from festival_finder.models import PeopleSearchParams, SearchParams
from festival_finder.models.search_types import coerce_int
from festival_finder.search.service import Service

router = APIRouter()

MAX_EVENT_ID = 2**31 - 1
"""Largest id an events row can have (32-bit integer primary key)."""


def get_service(request: Request) -> Service:
    """Return the search service attached to the application."""
    return request.app.state.service


def get_storage_base_url(request: Request) -> str:
    """Return the public image bucket URL configured for the application."""
    return request.app.state.storage_base_url


@router.get("/search/events")
async def search_events(
    query: Optional[str] = None,
    city: Optional[str] = None,
    country: Optional[str] = None,
    teachers: Optional[str] = None,
    musicians: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    service: Service = Depends(get_service),
    storage_base_url: str = Depends(get_storage_base_url),
) -> dict:
    """Search events by text, location and featured people."""
    params = SearchParams(
        query=query,
        city=city,
        country=country,
        teachers=teachers,
        musicians=musicians,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    response = await service.search(params)
    return success_envelope(event_search_data(response, storage_base_url))


@router.get("/search/teachers")
async def search_teachers(
    q: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: Service = Depends(get_service),
    storage_base_url: str = Depends(get_storage_base_url),
) -> dict:
    """Search teachers by name or bio."""
    params = PeopleSearchParams(query=q, page=page, limit=limit)
    response = await service.search_teachers(params)
    return success_envelope(teacher_search_data(response, storage_base_url))


@router.get("/search/musicians")
async def search_musicians(
    q: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: Service = Depends(get_service),
    storage_base_url: str = Depends(get_storage_base_url),
) -> dict:
    """Search musicians by name or bio."""
    params = PeopleSearchParams(query=q, page=page, limit=limit)
    response = await service.search_musicians(params)
    return success_envelope(musician_search_data(response, storage_base_url))


@router.get("/search/suggestions")
async def search_suggestions(
    query: Optional[str] = None,
    limit: Optional[str] = None,
    service: Service = Depends(get_service),
) -> dict:
    """Autocomplete suggestions for events, people and locations."""
    suggestions = await service.suggest(
        query, limit=coerce_int(limit, Config.DEFAULT_SUGGESTION_LIMIT)
    )
    return success_envelope(suggestions.model_dump())


@router.get("/events/{event_id}")
async def get_event(
    event_id: str,
    service: Service = Depends(get_service),
    storage_base_url: str = Depends(get_storage_base_url),
):
    """Fetch a single event with its teachers and musicians."""
    try:
        numeric_id = int(event_id)
    except ValueError:
        numeric_id = None
    if numeric_id is None or not 1 <= numeric_id <= MAX_EVENT_ID:
        return JSONResponse(
            status_code=400,
            content=error_envelope("Invalid event ID. Must be a positive integer."),
        )

    event = await service.get_event(numeric_id)
    if event is None:
        return JSONResponse(status_code=404, content=error_envelope("Event not found"))
    return success_envelope(event_detail_data(event, storage_base_url))


@router.get("/health")
async def health_check(service: Service = Depends(get_service)) -> dict:
    """Report service status and database connectivity."""
    database_ok = await service.health()
    return {
        "status": "healthy" if database_ok else "degraded",
        "checks": {"database": database_ok},
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }
