"""Transient chat history — process memory only, bounded, cleared on restart."""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class Speaker(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    ERROR = "error"


class ChatMessage(BaseModel):
    type: Speaker
    text: str
    is_general_query: bool | None = Field(default=None, serialization_alias="isGeneralQuery")
    error_kind: str | None = Field(default=None, serialization_alias="errorKind")
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatHistory:
    """Most recent ``limit`` messages, oldest first."""

    def __init__(self, limit: int = 200) -> None:
        self._messages: deque[ChatMessage] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._messages)

    def add_user(self, text: str) -> ChatMessage:
        return self._append(ChatMessage(type=Speaker.USER, text=text))

    def add_assistant(self, text: str, *, is_general_query: bool) -> ChatMessage:
        return self._append(
            ChatMessage(type=Speaker.ASSISTANT, text=text, is_general_query=is_general_query)
        )

    def add_error(self, text: str, *, kind: str) -> ChatMessage:
        return self._append(ChatMessage(type=Speaker.ERROR, text=text, error_kind=kind))

    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def clear(self) -> None:
        self._messages.clear()

    def _append(self, message: ChatMessage) -> ChatMessage:
        self._messages.append(message)
        return message
