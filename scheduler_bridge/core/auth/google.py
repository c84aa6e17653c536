# scheduler_bridge/core/auth/google.py
"""
Google OAuth2 identity provider.

Only two steps are needed here: building the consent URL and exchanging the
returned authorization code for tokens + the user's e-mail. Refreshing tokens
is deliberately not done; a stale session simply requires a new login.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlencode

import httpx

from scheduler_bridge.config import settings
from scheduler_bridge.core.errors import InternalError

from .schemas import Credential, SessionArtifact

log = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

SCOPES = (
    "https://www.googleapis.com/auth/calendar",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
)


class GoogleIdentityProvider:
    """Authorization-code flow against Google, returning a :class:`SessionArtifact`."""

    name: str = "google"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    @staticmethod
    def _require_config() -> tuple[str, str, str]:
        client_id = settings.GOOGLE_CLIENT_ID
        client_secret = settings.GOOGLE_CLIENT_SECRET
        redirect_uri = settings.GOOGLE_REDIRECT_URI
        log.info(
            "Google OAuth config: client id %s, redirect uri %s",
            "loaded" if client_id else "missing", redirect_uri,
        )
        if not client_id or not client_secret or not redirect_uri:
            raise InternalError("Config missing")
        return client_id, client_secret, redirect_uri

    def build_authorize_url(self) -> str:
        """
        Google consent screen URL for the fixed scope set.

        Raises:
            InternalError: If the OAuth client is not configured.
        """
        client_id, _, redirect_uri = self._require_config()
        params = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "access_type": "offline",
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> SessionArtifact:
        """
        Exchange an authorization code for tokens and the user's identity.

        Args:
            code (str): Authorization code from the callback.

        Returns:
            SessionArtifact: New session; the calendar handle is the e-mail.

        Raises:
            InternalError: If config is missing, Google rejects the exchange or
                the profile carries no e-mail.
        """
        client_id, client_secret, redirect_uri = self._require_config()
        try:
            async with httpx.AsyncClient(timeout=15.0, transport=self._transport) as client:
                resp = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": client_id,
                        "client_secret": client_secret,
                        "redirect_uri": redirect_uri,
                        "grant_type": "authorization_code",
                    },
                )
                resp.raise_for_status()
                tokens: dict[str, Any] = resp.json()

                info_resp = await client.get(
                    GOOGLE_USERINFO_URL,
                    headers={"Authorization": f"Bearer {tokens.get('access_token', '')}"},
                )
                info_resp.raise_for_status()
                user_info: dict[str, Any] = info_resp.json()
        except (httpx.HTTPError, ValueError) as e:
            log.error("OAuth code exchange failed: %s", type(e).__name__)
            raise InternalError("Authentication failed") from e

        email = user_info.get("email")
        if not email:
            log.error("OAuth profile returned no e-mail.")
            raise InternalError("Authentication failed")

        log.info("OAuth login completed for %s", email)
        return SessionArtifact(
            identity=email,
            credential=Credential.model_validate(tokens),
            calendar_handle=email,
        )


def get_identity_provider() -> GoogleIdentityProvider:
    return GoogleIdentityProvider()


__all__ = ["GoogleIdentityProvider", "get_identity_provider", "SCOPES"]
