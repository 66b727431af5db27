from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    """A single turn of the conversation, in chronological order."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    # Optional here so a missing message is reported like an empty one.
    message: str | None = None
    history: list[ChatMessage] = Field(default_factory=list)


class ChatResponse(BaseModel):
    success: bool = True
    response: str
    history: list[ChatMessage]


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
