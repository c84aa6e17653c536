# scheduler_bridge/api/v1/events.py

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from scheduler_bridge.core.auth.guard import get_current_principal
from scheduler_bridge.core.auth.schemas import Principal
from scheduler_bridge.core.calendar import normalize_events
from scheduler_bridge.core.calendar.schemas import UpcomingEventsResponse
from scheduler_bridge.core.errors import UpstreamTimeout, UpstreamUnavailable
from scheduler_bridge.core.upstream import ReasoningBackendClient, get_backend_client

router = APIRouter(prefix="/v1/events", tags=["events"])
log = logging.getLogger(__name__)


@router.get(
    "/upcoming",
    response_model=UpcomingEventsResponse,
    summary="Upcoming events grouped by day (Authenticated)",
    description=(
        "Fetches the backend's upcoming events and normalizes them. If the "
        "backend fails the list is empty so the page still renders."
    ),
)
async def list_upcoming(
    timezone: Optional[str] = Query(None, description="IANA zone used for date labels"),
    principal: Principal = Depends(get_current_principal),
    backend: ReasoningBackendClient = Depends(get_backend_client),
) -> UpcomingEventsResponse:
    try:
        raw_events = await backend.upcoming_events(principal.token)
    except (UpstreamUnavailable, UpstreamTimeout) as e:
        log.warning("[API /events] Upcoming events unavailable for '%s': %s", principal.identity, e.code)
        return UpcomingEventsResponse(upcoming=[])

    upcoming = normalize_events(raw_events, mode="upcoming", timezone=timezone)
    return UpcomingEventsResponse(upcoming=upcoming)
