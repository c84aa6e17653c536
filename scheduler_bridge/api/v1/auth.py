# scheduler_bridge/api/v1/auth.py

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, RedirectResponse

from scheduler_bridge.core.auth.codec import clear_session_cookie, encode_session, set_session_cookie
from scheduler_bridge.core.auth.google import GoogleIdentityProvider, get_identity_provider
from scheduler_bridge.core.auth.guard import get_optional_principal
from scheduler_bridge.core.auth.schemas import AuthStatus, Principal
from scheduler_bridge.core.errors import BadRequest

router = APIRouter(prefix="/v1/auth", tags=["Authentication"])
log = logging.getLogger(__name__)


@router.get(
    "/status",
    response_model=AuthStatus,
    summary="Is the browser logged in?",
)
async def auth_status(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> AuthStatus:
    if principal is None:
        return AuthStatus(authenticated=False)
    return AuthStatus(authenticated=True, email=principal.identity, calendar_id=principal.calendar_handle)


@router.get(
    "/google",
    summary="Begin login",
    description="Redirects to the Google consent screen with the calendar + profile scopes.",
)
async def begin_login(
    provider: GoogleIdentityProvider = Depends(get_identity_provider),
) -> RedirectResponse:
    return RedirectResponse(provider.build_authorize_url())


@router.get(
    "/callback",
    summary="Complete login",
    description="Exchanges the authorization code, issues the session cookie and redirects home.",
)
async def complete_login(
    code: Optional[str] = Query(None),
    provider: GoogleIdentityProvider = Depends(get_identity_provider),
) -> RedirectResponse:
    if not code:
        raise BadRequest("No code provided")

    artifact = await provider.exchange_code(code)
    response = RedirectResponse("/", status_code=307)
    # A new login replaces any previous session wholesale.
    set_session_cookie(response, encode_session(artifact))
    log.info("Session issued for %s", artifact.identity)
    return response


@router.post("/logout", summary="Clear the session cookie")
async def logout() -> JSONResponse:
    response = JSONResponse({"success": True})
    clear_session_cookie(response)
    return response
