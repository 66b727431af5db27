from __future__ import annotations

import asyncio
import logging

from google import genai
from google.genai import types

from chat_relay.core.settings import Settings, get_settings
from chat_relay.models.chat import ChatMessage
from chat_relay.services.provider_base import FALLBACK_REPLY

logger = logging.getLogger(__name__)

# Gemini names the assistant side of the conversation "model".
_GEMINI_ROLES = {"user": "user", "assistant": "model"}


class GeminiService:
    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

        if not self._settings.gemini_api_key:
            raise RuntimeError("GEMINI_API_KEY is not configured")

        # Recommended google-genai usage: instantiate a client.
        # Ref: https://pypi.org/project/google-genai/
        self._client = genai.Client(api_key=self._settings.gemini_api_key)

    async def complete(self, messages: list[ChatMessage], temperature: float) -> str:
        contents: list[types.Content] = [
            types.Content(
                role=_GEMINI_ROLES[msg.role],
                parts=[types.Part.from_text(text=msg.content)],
            )
            for msg in messages
        ]

        def _send() -> str:
            response = self._client.models.generate_content(
                model=self._settings.gemini_model,
                contents=contents,
                config=types.GenerateContentConfig(temperature=temperature),
            )

            # google-genai responses expose aggregated text via `.text`.
            text = getattr(response, "text", None)
            if isinstance(text, str) and text.strip():
                return text
            return FALLBACK_REPLY

        logger.debug(
            "Sending %d messages to %s", len(contents), self._settings.gemini_model
        )
        return await asyncio.to_thread(_send)
