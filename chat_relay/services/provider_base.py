from __future__ import annotations

from typing import Any, Protocol

from chat_relay.models.chat import ChatMessage

FALLBACK_REPLY = "Sorry, no reply was received."


class ChatProvider(Protocol):
    async def complete(self, messages: list[ChatMessage], temperature: float) -> str:
        ...


def to_role_content(messages: list[ChatMessage]) -> list[dict[str, str]]:
    return [{"role": msg.role, "content": msg.content} for msg in messages]


def first_choice_text(response: Any) -> str:
    """Reply text of an OpenAI-style completion, or the fallback placeholder."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return FALLBACK_REPLY

    message = getattr(choices[0], "message", None)
    text = getattr(message, "content", None)
    if isinstance(text, str) and text.strip():
        return text
    return FALLBACK_REPLY
