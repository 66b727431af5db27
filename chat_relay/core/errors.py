from __future__ import annotations

from fastapi.responses import JSONResponse


class ChatRelayError(Exception):
    """Base error carrying the HTTP status and the message shown to callers."""

    status_code: int = 500
    message: str = "Chat failed, please try again"

    def __init__(self, message: str | None = None, details: str | None = None):
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message)


class ChatValidationError(ChatRelayError):
    status_code = 400
    message = "Please enter a message"


class ConfigurationError(ChatRelayError):
    status_code = 500
    message = "No valid AI service is configured"


class ProviderError(ChatRelayError):
    """A provider call or provider construction failed."""

    status_code = 500
    message = "Chat failed, please try again"


def render_error(exc: ChatRelayError, expose_details: bool = False) -> JSONResponse:
    """
    Turn a relay error into the JSON error body returned to callers.

    The status and the static message come from the error type. ``details``
    is attached only when ``expose_details`` is set and the error carries some.
    """
    content = {"error": exc.message}
    if expose_details and exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)
