# scheduler_bridge/core/upstream/client.py

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from scheduler_bridge.config import settings
from scheduler_bridge.core.errors import UpstreamTimeout, UpstreamUnavailable

from .message import ConversationMessage

log = logging.getLogger(__name__)


class ReasoningBackendClient:
    """
    Async client for the remote reasoning backend.

    Every call opens its own ``httpx.AsyncClient`` so concurrent requests share
    nothing, runs under a hard wall-clock budget and is attempted exactly once.
    When the budget expires the in-flight request is cancelled and its
    connection closed before :class:`UpstreamTimeout` is raised.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        chat_timeout: Optional[float] = None,
        upcoming_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.REASONING_BACKEND_URL).rstrip("/")
        self.chat_timeout = chat_timeout if chat_timeout is not None else settings.UPSTREAM_TIMEOUT_SECONDS
        self.upcoming_timeout = (
            upcoming_timeout if upcoming_timeout is not None else settings.UPCOMING_TIMEOUT_SECONDS
        )
        self._transport = transport

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        # httpx's own timeout is disabled; the budget is enforced by the caller.
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=None, transport=self._transport
        ) as client:
            return await client.request(method, path, **kwargs)

    async def _call(self, method: str, path: str, budget: float, **kwargs: Any) -> Any:
        try:
            response = await asyncio.wait_for(self._send(method, path, **kwargs), timeout=budget)
        except asyncio.TimeoutError as e:
            log.error("Reasoning backend %s %s timed out after %ss", method, path, budget)
            raise UpstreamTimeout() from e
        except httpx.HTTPError as e:
            log.error("Reasoning backend %s %s failed: %s", method, path, type(e).__name__)
            raise UpstreamUnavailable() from e

        if response.is_error:
            log.error("Reasoning backend %s %s returned status %s", method, path, response.status_code)
            raise UpstreamUnavailable()

        try:
            return response.json()
        except ValueError as e:
            log.error("Reasoning backend %s %s returned a non-JSON body", method, path)
            raise UpstreamUnavailable() from e

    async def chat(
        self,
        messages: Sequence[ConversationMessage],
        timezone: Optional[str],
        user_token: str,
    ) -> Dict[str, Any]:
        """
        Forward the full conversation to ``POST /chat``.

        Args:
            messages (Sequence[ConversationMessage]): Whole history, in order.
            timezone (Optional[str]): Caller's IANA zone; ``DEFAULT_TIMEZONE`` if unset.
            user_token (str): Outbound credential selected by the session guard.

        Returns:
            Dict[str, Any]: Backend JSON body, untouched.

        Raises:
            UpstreamTimeout: Budget exceeded; the request was cancelled.
            UpstreamUnavailable: Transport failure, non-2xx status or unusable body.
        """
        payload = {
            "messages": [m.model_dump() for m in messages],
            "user_token": user_token,
            "timezone": timezone or settings.DEFAULT_TIMEZONE,
        }
        log.info(
            "Forwarding %d messages to reasoning backend (timezone=%s)",
            len(messages), payload["timezone"],
        )
        body = await self._call("POST", "/chat", self.chat_timeout, json=payload)
        if not isinstance(body, dict):
            log.error("Reasoning backend /chat returned a %s instead of an object", type(body).__name__)
            raise UpstreamUnavailable()
        return body

    async def upcoming_events(self, user_token: str) -> List[Any]:
        """
        Fetch ``GET /events/upcoming`` for the caller.

        Returns:
            List[Any]: The raw ``upcoming`` records (not yet normalized).

        Raises:
            UpstreamTimeout, UpstreamUnavailable: As for :meth:`chat`.
        """
        body = await self._call(
            "GET", "/events/upcoming", self.upcoming_timeout, params={"user_token": user_token}
        )
        upcoming = body.get("upcoming") if isinstance(body, dict) else None
        if not isinstance(upcoming, list):
            log.warning("Reasoning backend /events/upcoming returned no 'upcoming' list")
            return []
        log.debug("Reasoning backend returned %d upcoming events", len(upcoming))
        return upcoming


def get_backend_client() -> ReasoningBackendClient:
    return ReasoningBackendClient()


__all__ = ["ReasoningBackendClient", "get_backend_client"]
