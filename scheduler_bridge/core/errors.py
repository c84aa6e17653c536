# scheduler_bridge/core/errors.py
"""
Typed failures surfaced by the bridge.

Each error carries a fixed, non-sensitive ``message`` that is the only text a
client ever sees, a stable ``code`` and the HTTP status it maps to.
"""

from __future__ import annotations

from typing import Any


class BridgeError(Exception):
    """Base class for every error the request handlers turn into a response."""

    status_code: int = 500
    code: str = "internal.error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_public_dict(self) -> dict[str, Any]:
        return {"success": False, "code": self.code, "message": self.message}


class Unauthenticated(BridgeError):
    status_code = 401
    code = "auth.unauthenticated"
    default_message = "Not authenticated"


class BadRequest(BridgeError):
    status_code = 400
    code = "request.bad_request"
    default_message = "Invalid request."


class UpstreamUnavailable(BridgeError):
    status_code = 502
    code = "upstream.unavailable"
    default_message = "The AI server had trouble processing your request."


class UpstreamTimeout(BridgeError):
    status_code = 504
    code = "upstream.timeout"
    default_message = "Request timed out."


class InternalError(BridgeError):
    status_code = 500
    code = "internal.error"
    default_message = "Internal server error"


class SessionDecodeError(Exception):
    """Session token could not be turned back into an artifact.

    Raised by the codec only; the session guard converts it to
    :class:`Unauthenticated`.
    """


__all__ = [
    "BridgeError",
    "Unauthenticated",
    "BadRequest",
    "UpstreamUnavailable",
    "UpstreamTimeout",
    "InternalError",
    "SessionDecodeError",
]
