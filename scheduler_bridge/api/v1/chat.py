# scheduler_bridge/api/v1/chat.py

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from scheduler_bridge.core.auth.guard import get_current_principal
from scheduler_bridge.core.auth.schemas import Principal
from scheduler_bridge.core.errors import BadRequest
from scheduler_bridge.core.upstream import ReasoningBackendClient, get_backend_client, normalize_conversation

router = APIRouter(prefix="/v1/chat", tags=["chat"])
log = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    messages: Any = None
    timezone: Optional[str] = None


@router.post(
    "",
    summary="Send the conversation to the assistant (Authenticated)",
    description=(
        "Forwards the whole message history plus the caller's timezone to the "
        "reasoning backend and returns its JSON body unchanged."
    ),
)
async def send_message(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    backend: ReasoningBackendClient = Depends(get_backend_client),
) -> Dict[str, Any]:
    # Body is read only after the session guard has passed.
    try:
        payload = ChatRequest.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        raise BadRequest("Invalid request body.") from e

    messages = normalize_conversation(payload.messages)
    log.info("[API /chat] User '%s' sent %d messages", principal.identity, len(messages))
    return await backend.chat(messages, payload.timezone, principal.token)
