"""
Calendar subsystem package.

• ``BaseCalendarProvider`` – read-only provider interface (see base.py).
• ``get_calendar_provider()`` – factory returning the provider named
  explicitly or by ``settings.CALENDAR_PROVIDER``.
• ``normalize_events()`` – raw records → ``CalendarEvent`` / ``UpcomingEvent``.

Providers are imported lazily (``importlib.import_module``) so the Google SDK
is only loaded when it is actually used.
"""
from __future__ import annotations

import importlib
from typing import Callable, Dict, Type

from scheduler_bridge.config import settings
from .base import BaseCalendarProvider, RawEvent
from .normalizer import normalize_events
from .schemas import CalendarEvent, UpcomingEvent


def _lazy_import(module_suffix: str, class_name: str) -> Type[BaseCalendarProvider]:
    """
    _lazy_import(".providers.noop", "NoOpCalendarProvider")  →  <class NoOpCalendarProvider>
    """
    module = importlib.import_module(f"{__name__}{module_suffix}")
    return getattr(module, class_name)


_PROVIDER_LOADERS: Dict[str, Callable[[], Type[BaseCalendarProvider]]] = {
    "noop": lambda: _lazy_import(".providers.noop", "NoOpCalendarProvider"),
    "google": lambda: _lazy_import(".providers.google", "GoogleCalendarProvider"),
}


def get_calendar_provider(name: str | None = None) -> BaseCalendarProvider:
    """
    Return a calendar provider instance.

    • ``name`` – explicit name (case-insensitive).
    • Otherwise ``settings.CALENDAR_PROVIDER``.
    """
    provider_key = (name or settings.CALENDAR_PROVIDER).lower()
    try:
        loader = _PROVIDER_LOADERS[provider_key]
    except KeyError as exc:
        raise ValueError(f"Unknown calendar provider: {provider_key}") from exc
    return loader()()


__all__: list[str] = [
    "RawEvent",
    "BaseCalendarProvider",
    "CalendarEvent",
    "UpcomingEvent",
    "get_calendar_provider",
    "normalize_events",
]
