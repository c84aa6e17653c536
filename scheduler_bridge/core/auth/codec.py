# scheduler_bridge/core/auth/codec.py
"""
Session token codec.

The session artifact is serialized into a signed JWT that the browser keeps in
the ``session`` cookie. There is no server-side store: the token *is* the
session, so it cannot be revoked before expiry other than by the client
deleting it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Response
from jose import jwt, JWTError
from jose.utils import base64url_decode, base64url_encode
from pydantic import ValidationError

from scheduler_bridge.config import settings
from scheduler_bridge.core.errors import SessionDecodeError

from .schemas import Credential, SessionArtifact

log = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ("sub", "cal", "cred", "exp")


def encode_session(artifact: SessionArtifact, expires_delta: timedelta | None = None) -> str:
    """
    Serialize a session artifact into an opaque signed token.

    Args:
        artifact (SessionArtifact): Identity + credential to carry.
        expires_delta (timedelta | None, optional): Token lifetime.
            Defaults to ``settings.SESSION_MAX_AGE_SECONDS``.

    Returns:
        str: Token suitable for the session cookie.
    """
    if expires_delta is None:
        expires_delta = timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)
    claims: dict[str, Any] = {
        "sub": artifact.identity,
        "cal": artifact.calendar_handle,
        "cred": artifact.credential.model_dump(),
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    token = jwt.encode(claims, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)
    log.debug("Encoded session token for identity: %s", artifact.identity)
    return token


def _is_canonical(token: str) -> bool:
    # Each segment must re-encode to itself; otherwise a flipped padding bit
    # would still verify.
    try:
        raw = token.encode("ascii")
    except UnicodeEncodeError:
        return False
    segments = raw.split(b".")
    if len(segments) != 3:
        return False
    for segment in segments:
        try:
            if base64url_encode(base64url_decode(segment)) != segment:
                return False
        except ValueError:
            return False
    return True


def decode_session(token: str) -> SessionArtifact:
    """
    Turn a session token back into a :class:`SessionArtifact`.

    Raises:
        SessionDecodeError: For any tampered, expired, foreign or malformed token.
            No other exception escapes.
    """
    if not isinstance(token, str) or not _is_canonical(token):
        raise SessionDecodeError("malformed session token")
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.SESSION_SECRET_KEY,
            algorithms=[settings.SESSION_ALGORITHM],
        )
        missing = [claim for claim in _REQUIRED_CLAIMS if claim not in payload]
        if missing:
            raise SessionDecodeError(f"missing claims: {', '.join(missing)}")
        return SessionArtifact(
            identity=payload["sub"],
            calendar_handle=payload["cal"],
            credential=Credential.model_validate(payload["cred"]),
        )
    except SessionDecodeError:
        raise
    except JWTError as e:
        log.info("Session token rejected: %s", e)
        raise SessionDecodeError("invalid session token") from e
    except ValidationError as e:
        log.info("Session token claims rejected: %d validation errors", e.error_count())
        raise SessionDecodeError("invalid session claims") from e
    except Exception as e:
        log.exception("Unexpected error while decoding session token.")
        raise SessionDecodeError("undecodable session token") from e


# --- Cookie transport ---

def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token: script-unreadable, whole app path, 7 days."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=bool(settings.SESSION_COOKIE_SECURE),
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie immediately."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value="",
        max_age=0,
        httponly=True,
        secure=bool(settings.SESSION_COOKIE_SECURE),
        samesite="lax",
        path="/",
    )


__all__ = [
    "encode_session",
    "decode_session",
    "set_session_cookie",
    "clear_session_cookie",
]
