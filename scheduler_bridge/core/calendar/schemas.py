# scheduler_bridge/core/calendar/schemas.py
"""
Normalized calendar event shapes.

Used in:
    * api/v1/calendar.py          ― calendar embed view (``CalendarEvent``)
    * api/v1/events.py            ― upcoming list (``UpcomingEvent``)
    * core/calendar/normalizer.py ― raw record → normalized event
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EventStatus = Literal["confirmed", "tentative", "cancelled"]


class CalendarEvent(BaseModel):
    """Event as every UI surface consumes it. Serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., description="Unique within one response")
    title: str = Field(..., min_length=1)
    start: str = Field(..., description="ISO date-time or date, verbatim from upstream")
    end: str = Field(..., description="ISO date-time or date, verbatim from upstream")
    all_day: bool


class UpcomingEvent(CalendarEvent):
    """Event in the upcoming list, with grouping and urgency markers."""

    date_label: str
    status: EventStatus = "confirmed"
    is_urgent: bool = False
    show_date_header: bool = Field(..., description="First event under its date label")


class CalendarEventsResponse(BaseModel):
    events: List[CalendarEvent] = Field(default_factory=list)


class UpcomingEventsResponse(BaseModel):
    upcoming: List[UpcomingEvent] = Field(default_factory=list)


__all__: list[str] = [
    "EventStatus",
    "CalendarEvent",
    "UpcomingEvent",
    "CalendarEventsResponse",
    "UpcomingEventsResponse",
]
