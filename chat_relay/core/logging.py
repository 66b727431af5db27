from __future__ import annotations

import logging

from chat_relay.core.settings import Settings

# HTTP-level chatter from the provider SDKs; kept at WARNING unless the
# service itself runs more verbosely.
_SDK_LOGGERS = ("httpx", "httpcore", "openai", "zhipuai", "google_genai")


def resolve_log_level(level_name: str | None) -> int:
    level = logging.getLevelName((level_name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Settings) -> None:
    level = resolve_log_level(settings.log_level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    for name in ("uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)

    for name in _SDK_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
