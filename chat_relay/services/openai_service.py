from __future__ import annotations

import asyncio
import logging

from openai import OpenAI

from chat_relay.core.settings import Settings, get_settings
from chat_relay.models.chat import ChatMessage
from chat_relay.services.provider_base import first_choice_text, to_role_content

logger = logging.getLogger(__name__)


class OpenAIService:
    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

        if not self._settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY is not configured")

        # The SDK retries on its own by default; failures must surface as-is.
        self._client = OpenAI(api_key=self._settings.openai_api_key, max_retries=0)

    async def complete(self, messages: list[ChatMessage], temperature: float) -> str:
        payload = to_role_content(messages)

        def _send() -> str:
            try:
                response = self._client.chat.completions.create(
                    model=self._settings.openai_model,
                    messages=payload,
                    temperature=temperature,
                )
            finally:
                # One service is built per request; release its connection pool.
                self._client.close()
            return first_choice_text(response)

        logger.debug(
            "Sending %d messages to %s", len(payload), self._settings.openai_model
        )
        return await asyncio.to_thread(_send)
