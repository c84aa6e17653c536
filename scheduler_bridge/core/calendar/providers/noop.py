from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from ..base import BaseCalendarProvider, RawEvent

log = logging.getLogger(__name__)


class NoOpCalendarProvider(BaseCalendarProvider):
    """Empty calendar – for dev and tests without Google credentials."""

    name: str = "noop"

    async def list_events(
        self,
        token: str,
        time_min: datetime,
        time_max: datetime,
        max_results: int = 50,
    ) -> List[RawEvent]:
        log.debug("NoOp: Listing events between %s and %s", time_min, time_max)
        return []
