# scheduler_bridge/core/calendar/base.py
"""
Abstract base for calendar-read providers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List

RawEvent = Dict[str, Any]


class BaseCalendarProvider(ABC):
    """
    Read-only calendar provider (async).

    Returns raw provider records; shaping them is the normalizer's job.
    """

    name: str

    @abstractmethod
    async def list_events(
        self,
        token: str,
        time_min: datetime,
        time_max: datetime,
        max_results: int = 50,
    ) -> List[RawEvent]:
        """
        Events of the caller's primary calendar in ``[time_min, time_max]``,
        ordered by start time.

        Args:
            token (str): OAuth access token from the session.
            time_min (datetime): Window start (aware, UTC).
            time_max (datetime): Window end (aware, UTC).
            max_results (int): Upper bound on returned records.

        Raises:
            Exception: Provider API errors propagate to the caller.
        """
        ...


__all__ = ["RawEvent", "BaseCalendarProvider"]
