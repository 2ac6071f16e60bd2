"""Chat turn model for the place assistant.

Chat messages are transient: the client resends the whole history with
every request and nothing is stored server-side.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One prior turn of a conversation, in conversation order."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str
