from __future__ import annotations
import logging

from fastapi import FastAPI, status

from scheduler_bridge.api.errors import register_exception_handlers
from scheduler_bridge.api.v1.auth import router as auth_router
from scheduler_bridge.api.v1.calendar import router as calendar_router
from scheduler_bridge.api.v1.chat import router as chat_router
from scheduler_bridge.api.v1.events import router as events_router
from scheduler_bridge.config import settings

# Configure basic logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
log = logging.getLogger(__name__)

description = """
Session bridge and upstream orchestration for the scheduling assistant.

The browser keeps its whole session in the `session` cookie; chat turns are
forwarded to the reasoning backend and calendar records come back normalized.
"""
tags_metadata = [
    {"name": "Authentication", "description": "Google login, session cookie, logout."},
    {"name": "chat", "description": "Conversation forwarding to the reasoning backend."},
    {"name": "events", "description": "Upcoming events, grouped by day."},
    {"name": "calendar", "description": "Events for the calendar view."},
    {"name": "Health", "description": "Liveness."},
]

app = FastAPI(
    title="Scheduler Bridge API",
    description=description,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(chat_router)
app.include_router(events_router)
app.include_router(calendar_router)

log.info("\U0001F331 FastAPI application configured. Environment: %s", settings.ENVIRONMENT)


@app.get("/healthz", tags=["Health"], status_code=status.HTTP_200_OK)
async def health_check():
    """Basic health check endpoint."""
    return {"status": "ok", "environment": settings.ENVIRONMENT}
