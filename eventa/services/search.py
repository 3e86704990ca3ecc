# eventa/services/search.py
from datetime import datetime
from typing import Optional, Union

from eventa.api_client import request, unwrap
from eventa.errors import EventaError
from eventa.models.event import EventPage, EventSummary


def build_search_params(
    category: Optional[str] = None,
    address: Optional[str] = None,
    name: Optional[str] = None,
    start_time: Union[datetime, str, None] = None,
    end_time: Union[datetime, str, None] = None,
    page=1,
    size=10,
    sort_by: Optional[str] = None,
) -> dict:
    """Drop blank filters and keep paging inside what the backend accepts."""
    params = {}
    for key, value in (("category", category), ("address", address), ("name", name), ("sortBy", sort_by)):
        if value and value.strip():
            params[key] = value.strip()

    for key, value in (("startTime", start_time), ("endTime", end_time)):
        if value:
            params[key] = value.isoformat() if isinstance(value, datetime) else value

    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    try:
        size = int(size)
    except (TypeError, ValueError):
        size = 10

    params["page"] = max(1, page or 1)
    params["size"] = max(1, min(100, size or 10))
    return params


async def search_events(session, **filters) -> EventPage:
    body = await request(
        session.client, "GET", "events/recommend",
        params=build_search_params(**filters),
        default_error="Something went wrong while searching",
    )
    data = unwrap(body) or {}

    return EventPage(
        events=[EventSummary.model_validate(e) for e in data.get("listEvents") or []],
        page=data.get("pageNo") or 1,
        total_pages=data.get("totalPages") or 1,
        page_size=data.get("pageSize") or 10,
    )


async def check_connection(session) -> bool:
    try:
        await request(session.client, "GET", "events/recommend", params={"page": 1, "size": 1})
    except EventaError:
        return False
    return True
