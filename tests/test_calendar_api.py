from datetime import timedelta

import pytest

from scheduler_bridge.main import app
from scheduler_bridge.api.v1.calendar import get_provider
from scheduler_bridge.core.calendar import get_calendar_provider
from scheduler_bridge.core.calendar.providers.noop import NoOpCalendarProvider


class FakeProvider:
    name = "fake"

    def __init__(self, items=None, error=None):
        self.items = items or []
        self.error = error
        self.calls = []

    async def list_events(self, token, time_min, time_max, max_results=50):
        self.calls.append((token, time_min, time_max, max_results))
        if self.error:
            raise self.error
        return self.items


GOOGLE_ITEMS = [
    {"id": "g1", "summary": "Team sync", "start": {"dateTime": "2025-06-01T09:00:00+05:30"},
     "end": {"dateTime": "2025-06-01T10:00:00+05:30"}},
    {"id": "g2", "start": {"date": "2025-06-02"}, "end": {"date": "2025-06-03"}},
]


def test_calendar_requires_session(client):
    fake = FakeProvider(GOOGLE_ITEMS)
    app.dependency_overrides[get_provider] = lambda: fake
    res = client.get("/v1/calendar/events")
    assert res.status_code == 401
    assert fake.calls == []


def test_calendar_events_are_normalized(auth_client):
    fake = FakeProvider(GOOGLE_ITEMS)
    app.dependency_overrides[get_provider] = lambda: fake

    res = auth_client.get("/v1/calendar/events")

    assert res.status_code == 200
    assert res.json() == {
        "events": [
            {"id": "g1", "title": "Team sync", "start": "2025-06-01T09:00:00+05:30",
             "end": "2025-06-01T10:00:00+05:30", "allDay": False},
            {"id": "g2", "title": "(No Title)", "start": "2025-06-02", "end": "2025-06-03", "allDay": True},
        ]
    }
    token, time_min, time_max, max_results = fake.calls[0]
    assert token == "at-1"
    assert time_max - time_min == timedelta(days=7)
    assert max_results == 50


def test_provider_failure_is_generic_500(auth_client):
    app.dependency_overrides[get_provider] = lambda: FakeProvider(error=RuntimeError("quota exceeded for key abc"))
    res = auth_client.get("/v1/calendar/events")
    assert res.status_code == 500
    assert res.json()["message"] == "Failed to fetch events"
    assert "quota" not in res.text


def test_noop_provider_is_default_in_tests(auth_client):
    assert isinstance(get_calendar_provider(), NoOpCalendarProvider)
    res = auth_client.get("/v1/calendar/events")
    assert res.status_code == 200
    assert res.json() == {"events": []}


def test_unknown_provider_name():
    with pytest.raises(ValueError):
        get_calendar_provider("outlook")
