# scheduler_bridge/core/upstream/message.py

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from scheduler_bridge.core.errors import BadRequest


class ConversationMessage(BaseModel):
    """One turn of the conversation as sent to the reasoning backend."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class InboundMessage(BaseModel):
    """A turn as the browser sends it: text may sit in ``content`` or ``text``."""
    model_config = ConfigDict(extra="ignore")

    role: Literal["user", "assistant"]
    content: Optional[str] = None
    text: Optional[str] = None

    def normalized(self) -> ConversationMessage:
        # content > text > ""
        return ConversationMessage(role=self.role, content=self.content or self.text or "")


def normalize_conversation(raw: Any) -> List[ConversationMessage]:
    """
    Validate and normalize an inbound conversation, preserving order.

    Args:
        raw (Any): Decoded ``messages`` field of the request body.

    Returns:
        List[ConversationMessage]: Messages ready to forward.

    Raises:
        BadRequest: If ``raw`` is not a non-empty list of well-formed turns
            with non-empty text.
    """
    if not isinstance(raw, list):
        raise BadRequest("Invalid format: messages must be an array.")
    if not raw:
        raise BadRequest("Invalid format: messages must not be empty.")

    messages: List[ConversationMessage] = []
    for item in raw:
        try:
            message = InboundMessage.model_validate(item).normalized()
        except ValidationError as e:
            raise BadRequest("Invalid format: each message needs a role of 'user' or 'assistant'.") from e
        if not message.content:
            raise BadRequest("Invalid format: message content must not be empty.")
        messages.append(message)
    return messages


__all__ = ["ConversationMessage", "InboundMessage", "normalize_conversation"]
