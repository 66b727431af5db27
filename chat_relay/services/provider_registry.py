from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from chat_relay.core.errors import ConfigurationError
from chat_relay.core.settings import Settings
from chat_relay.services.gemini_service import GeminiService
from chat_relay.services.openai_service import OpenAIService
from chat_relay.services.provider_base import ChatProvider
from chat_relay.services.zhipu_service import ZhipuService


class ProviderName(str, Enum):
    ZHIPU = "zhipu"
    OPENAI = "openai"
    GEMINI = "gemini"

    @classmethod
    def parse(cls, value: str | None) -> "ProviderName":
        """
        Resolve an ``AI_SERVICE`` value to a known provider.

        Blank values select the default provider. Matching ignores case and
        surrounding whitespace.
        """
        normalized = (value or "").strip().lower()
        if not normalized:
            return DEFAULT_PROVIDER
        try:
            return cls(normalized)
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"No valid AI service is configured "
                f"(set AI_SERVICE to one of: {known})"
            ) from None


DEFAULT_PROVIDER = ProviderName.ZHIPU

ProviderFactory = Callable[[ProviderName, Settings], ChatProvider]

PROVIDER_BUILDERS: dict[ProviderName, Callable[[Settings], ChatProvider]] = {
    ProviderName.ZHIPU: ZhipuService,
    ProviderName.OPENAI: OpenAIService,
    ProviderName.GEMINI: GeminiService,
}


def build_provider(name: ProviderName, settings: Settings) -> ChatProvider:
    return PROVIDER_BUILDERS[name](settings)
