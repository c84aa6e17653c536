# scheduler_bridge/core/auth/schemas.py

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Credential(BaseModel):
    """
    Token bundle returned by the identity provider.

    Only ``access_token`` / ``id_token`` are interpreted; every other field the
    provider sent (``refresh_token``, ``scope``, ``expiry_date``...) is kept as-is.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    access_token: str | None = None
    id_token: str | None = None


class SessionArtifact(BaseModel):
    """Client-held record of an authenticated principal. Immutable once issued."""
    model_config = ConfigDict(frozen=True)

    identity: str = Field(..., min_length=1, description="Provider-issued user id (email)")
    credential: Credential
    calendar_handle: str = Field(..., min_length=1, description="Calendar to render/query")


class Principal(BaseModel):
    """Validated caller of a single request."""
    model_config = ConfigDict(frozen=True)

    identity: str
    calendar_handle: str
    token: str = Field(..., description="Outbound credential for upstream calls")


class AuthStatus(BaseModel):
    """Login state for the browser. Serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    authenticated: bool
    email: str | None = None
    calendar_id: str | None = None
