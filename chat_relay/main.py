import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chat_relay.api import chat, health
from chat_relay.core.errors import ChatValidationError, render_error
from chat_relay.core.logging import configure_logging
from chat_relay.core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings

    # Any origin is echoed back so credentialed requests are accepted.
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_payload_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Rejected malformed chat payload: %s", exc.errors())
        return render_error(
            ChatValidationError(
                "Invalid request payload",
                details="; ".join(err["msg"] for err in exc.errors()),
            ),
            expose_details=settings.is_development,
        )

    app.include_router(chat.router, prefix="/api")

    app.include_router(health.router)

    return app


app = create_app()
