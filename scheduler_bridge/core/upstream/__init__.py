"""
Reasoning backend integration.

• ``ConversationMessage`` / ``normalize_conversation`` – inbound chat turns.
• ``ReasoningBackendClient`` – bounded, single-attempt calls to the backend.
"""
from __future__ import annotations

from .client import ReasoningBackendClient, get_backend_client
from .message import ConversationMessage, InboundMessage, normalize_conversation

__all__: list[str] = [
    "ConversationMessage",
    "InboundMessage",
    "normalize_conversation",
    "ReasoningBackendClient",
    "get_backend_client",
]
