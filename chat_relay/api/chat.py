import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from chat_relay.core.errors import (
    ChatValidationError,
    ConfigurationError,
    ProviderError,
    render_error,
)
from chat_relay.core.settings import Settings
from chat_relay.dependencies import get_app_settings, get_chat_relay_service
from chat_relay.models.chat import ChatRequest, ChatResponse, ErrorResponse
from chat_relay.services.chat_relay_service import ChatRelayService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat_endpoint(
    request: ChatRequest,
    settings: Settings = Depends(get_app_settings),
    relay_service: ChatRelayService = Depends(get_chat_relay_service),
) -> ChatResponse | JSONResponse:
    """
    Relay one chat turn to the configured AI service.

    The caller sends the full history each time; the response carries that
    history extended with the new user turn and the assistant reply.
    """
    try:
        return await relay_service.relay(request)
    except ChatValidationError as e:
        logger.info("Rejected chat request: %s", e.message)
        return render_error(e)
    except ConfigurationError as e:
        logger.error("Chat relay misconfigured: %s", e.message)
        return render_error(e)
    except Exception as e:
        logger.exception("Chat endpoint failed")
        return render_error(
            ProviderError(details=str(e)),
            expose_details=settings.is_development,
        )
