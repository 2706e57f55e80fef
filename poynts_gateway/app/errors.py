"""Error taxonomy and the central error dispatcher for the proxy layer.

Every error that reaches a client is rendered as ``{"error": "<message>"}``
with the status carried by the error. Upstream failures never pass through
here: the proxy client captures them as envelopes instead.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ProxyError(Exception):
    """Base class for errors raised by the proxy layer."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthorizedError(ProxyError):
    """Caller has no valid identity."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(ProxyError):
    """Caller is authenticated but lacks the required permission."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class BadRequestError(ProxyError):
    """Malformed or missing request data."""

    def __init__(self, message: str = "Bad Request") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class NotFoundError(ProxyError):
    """Requested resource does not exist."""

    def __init__(self, message: str = "Not Found") -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class BadGatewayError(ProxyError):
    """Upstream backend could not be reached."""

    def __init__(self, message: str = "Bad Gateway") -> None:
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


class ConfigurationError(RuntimeError):
    """Fatal misconfiguration detected at startup (e.g. missing BACKEND_API_KEY)."""


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the uniform ``{"error": message}`` response."""
    return JSONResponse({"error": message}, status_code=status_code)


def handle_error(error: object) -> JSONResponse:
    """Map any raised value to an error response.

    Args:
        error: The exception (or any other thrown value)

    Returns:
        JSONResponse with the error's status for known proxy errors,
        otherwise a generic 500
    """
    if isinstance(error, ProxyError):
        return error_response(error.message, error.status_code)

    if isinstance(error, Exception):
        logger.error("Unexpected error: %s", error, exc_info=error)
        return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.error(f"Unknown error type: {error!r}")
    return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


def unauthorized(message: str = "Unauthorized") -> JSONResponse:
    """Standard 401 response."""
    return error_response(message, status.HTTP_401_UNAUTHORIZED)


def forbidden(message: str = "Forbidden") -> JSONResponse:
    """Standard 403 response."""
    return error_response(message, status.HTTP_403_FORBIDDEN)


def bad_request(message: str = "Bad Request") -> JSONResponse:
    """Standard 400 response."""
    return error_response(message, status.HTTP_400_BAD_REQUEST)


def not_found(message: str = "Not Found") -> JSONResponse:
    """Standard 404 response."""
    return error_response(message, status.HTTP_404_NOT_FOUND)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Route every error raised while handling a request through handle_error."""

    @app.exception_handler(ProxyError)
    async def _handle_proxy_error(_: Request, exc: ProxyError) -> JSONResponse:
        return handle_error(exc)

    @app.exception_handler(RequestValidationError)
    async def _handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("validation error: %s", exc.errors())
        return handle_error(BadRequestError(_validation_message(exc)))

    @app.exception_handler(Exception)
    async def _handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        return handle_error(exc)
