# scheduler_bridge/core/calendar/normalizer.py
"""
Raw provider/backend event records → :mod:`schemas` events.

Pure and synchronous. Malformed or partial records never raise: every missing
field degrades to a fixed default.

Accepted raw variants:
    * Google Calendar items: ``summary``, ``start: {dateTime|date}``
    * reasoning backend items: ``title``, ``start_time``/``end_time``,
      ``date_label``, ``status``, ``is_urgent``
    * plain ISO strings in ``start``/``end``
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, List, Literal, Mapping, Optional, Sequence, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from scheduler_bridge.config import settings

from .schemas import CalendarEvent, EventStatus, UpcomingEvent

log = logging.getLogger(__name__)

NO_TITLE = "(No Title)"
UNSCHEDULED = "Unscheduled"
DATE_LABEL_FORMAT = "%A, %d %B %Y"
STATUSES: Tuple[EventStatus, ...] = ("confirmed", "tentative", "cancelled")

NormalizeMode = Literal["embed", "upcoming"]

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _time_value(raw: Mapping[str, Any], key: str, alt_key: str) -> Tuple[Optional[str], bool]:
    """Return (value, has_time_of_day) for ``start``/``end``."""
    value = raw.get(key)
    if isinstance(value, Mapping):
        date_time = value.get("dateTime")
        if isinstance(date_time, str) and date_time:
            return date_time, True
        date_only = value.get("date")
        if isinstance(date_only, str) and date_only:
            return date_only, False
        value = None
    if not (isinstance(value, str) and value):
        value = raw.get(alt_key)
    if isinstance(value, str) and value:
        return value, not _DATE_ONLY_RE.match(value.strip())
    return None, False


def _unique_id(value: Any, index: int, seen: set) -> str:
    base = str(value) if value not in (None, "") else f"event-{index}"
    candidate = base
    if candidate in seen:
        candidate = f"{base}-{index}"
    n = 1
    while candidate in seen:
        candidate = f"{base}-{index}-{n}"
        n += 1
    return candidate


def _title(raw: Mapping[str, Any]) -> str:
    for key in ("title", "summary"):
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return NO_TITLE


def _status(raw: Mapping[str, Any]) -> EventStatus:
    value = raw.get("status")
    if isinstance(value, str) and value.strip().lower() in STATUSES:
        return value.strip().lower()  # type: ignore[return-value]
    return "confirmed"


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _is_urgent(raw: Mapping[str, Any]) -> bool:
    # Upstream flag only; proximity to "now" is a UI concern.
    for key in ("is_urgent", "isUrgent", "urgent"):
        if key in raw:
            return _flag(raw[key])
    return False


def _zone(name: Optional[str]) -> ZoneInfo:
    for candidate in (name, settings.DEFAULT_TIMEZONE):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            log.warning("Unknown timezone %r, falling back", candidate)
    return ZoneInfo("UTC")


def _local_date(value: str, zone: ZoneInfo) -> Optional[date]:
    value = value.strip()
    try:
        if _DATE_ONLY_RE.match(value):
            return date.fromisoformat(value)
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(zone)
    return parsed.date()


def _date_label(start: Optional[str], raw: Mapping[str, Any], zone: ZoneInfo) -> str:
    day = _local_date(start, zone) if start else None
    if day is not None:
        return day.strftime(DATE_LABEL_FORMAT)
    upstream = raw.get("date_label") or raw.get("dateLabel")
    if isinstance(upstream, str) and upstream.strip():
        return upstream.strip()
    return UNSCHEDULED


def normalize_events(
    raw_events: Optional[Sequence[Any]],
    mode: NormalizeMode = "embed",
    timezone: Optional[str] = None,
) -> Union[List[CalendarEvent], List[UpcomingEvent]]:
    """
    Normalize raw event records, preserving their order.

    Args:
        raw_events (Optional[Sequence[Any]]): Records as delivered upstream.
        mode (NormalizeMode): ``embed`` for the calendar view, ``upcoming`` for
            the grouped list.
        timezone (Optional[str]): Caller's IANA zone, used for date labels.

    Returns:
        List of :class:`CalendarEvent` (embed) or :class:`UpcomingEvent`
        (upcoming). ``showDateHeader`` is set by adjacency: an event starts a
        new group iff its label differs from its predecessor's.
    """
    zone = _zone(timezone)
    seen_ids: set[str] = set()
    out: list = []
    previous_label: Optional[str] = None

    for index, raw in enumerate(raw_events or ()):
        if not isinstance(raw, Mapping):
            log.warning("Skipping non-mapping event record at index %d", index)
            continue

        event_id = _unique_id(raw.get("id"), index, seen_ids)
        seen_ids.add(event_id)

        start, has_time = _time_value(raw, "start", "start_time")
        end, _ = _time_value(raw, "end", "end_time")
        fields = {
            "id": event_id,
            "title": _title(raw),
            "start": start or "",
            "end": end or start or "",
            "all_day": not has_time,
        }

        if mode == "upcoming":
            label = _date_label(start, raw, zone)
            out.append(
                UpcomingEvent(
                    **fields,
                    date_label=label,
                    status=_status(raw),
                    is_urgent=_is_urgent(raw),
                    show_date_header=not out or label != previous_label,
                )
            )
            previous_label = label
        else:
            out.append(CalendarEvent(**fields))

    log.debug("Normalized %d events (mode=%s)", len(out), mode)
    return out


__all__ = ["normalize_events", "NO_TITLE", "UNSCHEDULED", "DATE_LABEL_FORMAT", "NormalizeMode"]
