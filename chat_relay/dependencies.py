from __future__ import annotations

from fastapi import Depends, Request

from chat_relay.core.settings import Settings
from chat_relay.services.chat_relay_service import ChatRelayService
from chat_relay.services.provider_registry import ProviderFactory, build_provider


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_provider_factory() -> ProviderFactory:
    return build_provider


def get_chat_relay_service(
    settings: Settings = Depends(get_app_settings),
    provider_factory: ProviderFactory = Depends(get_provider_factory),
) -> ChatRelayService:
    return ChatRelayService(settings=settings, provider_factory=provider_factory)
