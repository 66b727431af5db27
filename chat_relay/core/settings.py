from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEVELOPMENT_ENVIRONMENTS = {"development", "dev", "local"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app_name: str = Field(default="Chat Relay", alias="APP_NAME")
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Validated per request, so a bad value is reported instead of
    # preventing startup.
    ai_service: str = Field(default="zhipu", alias="AI_SERVICE")

    zhipu_api_key: str | None = Field(default=None, alias="ZHIPU_API_KEY")
    zhipu_model: str = Field(default="glm-4", alias="ZHIPU_MODEL")

    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-3.5-turbo", alias="OPENAI_MODEL")

    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() in _DEVELOPMENT_ENVIRONMENTS


@lru_cache
def get_settings() -> Settings:
    return Settings()
