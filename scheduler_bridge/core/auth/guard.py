# scheduler_bridge/core/auth/guard.py

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request

from scheduler_bridge.config import settings
from scheduler_bridge.core.errors import SessionDecodeError, Unauthenticated

from .codec import decode_session
from .schemas import Credential, Principal

log = logging.getLogger(__name__)


def select_token(credential: Credential) -> Optional[str]:
    """Outbound credential: access token first, identity token second."""
    return credential.access_token or credential.id_token or None


def authorize(session_token: Optional[str]) -> Principal:
    """
    Validate a session token and return the caller.

    Args:
        session_token (Optional[str]): Raw cookie value, if any.

    Returns:
        Principal: Identity, calendar handle and selected outbound token.

    Raises:
        Unauthenticated: Missing, undecodable or token-less session. All three
            cases produce the same error.
    """
    if not session_token:
        log.debug("No session cookie on request.")
        raise Unauthenticated()

    try:
        artifact = decode_session(session_token)
    except SessionDecodeError as e:
        log.info("Session cookie rejected: %s", e)
        raise Unauthenticated() from e

    token = select_token(artifact.credential)
    if not token:
        log.warning("Session for %s carries no usable token.", artifact.identity)
        raise Unauthenticated()

    return Principal(identity=artifact.identity, calendar_handle=artifact.calendar_handle, token=token)


# --- FastAPI dependencies ---

async def get_current_principal(request: Request) -> Principal:
    """Dependency: the authenticated caller, or 401."""
    return authorize(request.cookies.get(settings.SESSION_COOKIE_NAME))


async def get_optional_principal(request: Request) -> Optional[Principal]:
    """Dependency: the authenticated caller, or ``None``."""
    try:
        return authorize(request.cookies.get(settings.SESSION_COOKIE_NAME))
    except Unauthenticated:
        return None


__all__ = ["authorize", "select_token", "get_current_principal", "get_optional_principal"]
