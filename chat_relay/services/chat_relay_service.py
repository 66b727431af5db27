from __future__ import annotations

import logging

from chat_relay.core.errors import ChatValidationError
from chat_relay.core.settings import Settings, get_settings
from chat_relay.models.chat import ChatMessage, ChatRequest, ChatResponse
from chat_relay.services.provider_registry import (
    ProviderFactory,
    ProviderName,
    build_provider,
)

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7


class ChatRelayService:
    """Forwards a chat turn to the configured provider and extends the history."""

    def __init__(
        self,
        settings: Settings | None = None,
        provider_factory: ProviderFactory = build_provider,
    ) -> None:
        self._settings = settings or get_settings()
        self._provider_factory = provider_factory

    async def relay(self, request: ChatRequest) -> ChatResponse:
        message = request.message
        if not message or not message.strip():
            raise ChatValidationError()

        provider_name = ProviderName.parse(self._settings.ai_service)
        provider = self._provider_factory(provider_name, self._settings)

        user_turn = ChatMessage(role="user", content=message)
        messages = [*request.history, user_turn]

        logger.info(
            "Relaying chat to %s (history=%d)",
            provider_name.value,
            len(request.history),
        )
        reply = await provider.complete(messages, temperature=TEMPERATURE)

        return ChatResponse(
            success=True,
            response=reply,
            history=[*messages, ChatMessage(role="assistant", content=reply)],
        )
