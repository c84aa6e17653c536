from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends

from scheduler_bridge.config import settings
from scheduler_bridge.core.auth.guard import get_current_principal
from scheduler_bridge.core.auth.schemas import Principal
from scheduler_bridge.core.calendar import BaseCalendarProvider, get_calendar_provider, normalize_events
from scheduler_bridge.core.calendar.schemas import CalendarEventsResponse
from scheduler_bridge.core.errors import InternalError

router = APIRouter(prefix="/v1/calendar", tags=["calendar"])
log = logging.getLogger(__name__)


def get_provider() -> BaseCalendarProvider:
    return get_calendar_provider()


@router.get("/events", response_model=CalendarEventsResponse)
async def get_calendar_events(
    principal: Principal = Depends(get_current_principal),
    provider: BaseCalendarProvider = Depends(get_provider),
) -> CalendarEventsResponse:
    now = datetime.now(timezone.utc)
    try:
        items = await provider.list_events(
            principal.token,
            now,
            now + timedelta(days=settings.CALENDAR_WINDOW_DAYS),
            max_results=settings.CALENDAR_MAX_RESULTS,
        )
    except Exception as e:
        log.exception("Error fetching calendar events for %s", principal.identity)
        raise InternalError("Failed to fetch events") from e
    return CalendarEventsResponse(events=normalize_events(items, mode="embed"))
