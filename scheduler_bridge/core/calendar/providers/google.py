from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from ..base import BaseCalendarProvider, RawEvent

log = logging.getLogger(__name__)


class GoogleCalendarProvider(BaseCalendarProvider):
    """Google Calendar v3, authorized with the user's own access token."""

    name: str = "google"

    def __init__(self, calendar_id: str = "primary") -> None:
        self._calendar_id = calendar_id

    def _list_sync(self, token: str, time_min: datetime, time_max: datetime, max_results: int) -> List[RawEvent]:
        creds = Credentials(token=token)
        svc = build("calendar", "v3", credentials=creds, cache_discovery=False)
        resp = svc.events().list(
            calendarId=self._calendar_id,
            timeMin=time_min.isoformat(),
            timeMax=time_max.isoformat(),
            maxResults=max_results,
            singleEvents=True,
            orderBy="startTime",
        ).execute()
        return resp.get("items", [])

    async def list_events(
        self,
        token: str,
        time_min: datetime,
        time_max: datetime,
        max_results: int = 50,
    ) -> List[RawEvent]:
        # googleapiclient is blocking; keep the event loop free.
        items = await asyncio.to_thread(self._list_sync, token, time_min, time_max, max_results)
        log.info("[Calendar] fetched %d events from %s", len(items), self._calendar_id)
        return items
