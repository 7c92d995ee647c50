"""Error kinds raised by the chat backend and their HTTP translation."""
import logging
from typing import Dict, Optional, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ChatBackendError(Exception):
    """Base class for errors that map onto an HTTP response."""

    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(ChatBackendError):
    """Missing, malformed or invalid identity credential."""

    default_message = "Unauthenticated"

    def __init__(self, message: Optional[str] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason


class StoreError(ChatBackendError):
    """A database operation failed."""


class StoreUnavailableError(StoreError):
    """The store has no live connection."""

    default_message = "Store unavailable"


class UploadCredentialError(ChatBackendError):
    """Upload credentials could not be issued."""

    default_message = "Upload credentials unavailable"


# Most specific class first; lookups walk the exception's MRO.
ERROR_STATUS: Dict[Type[ChatBackendError], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UploadCredentialError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ChatBackendError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: ChatBackendError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def chat_backend_error_handler(request: Request, exc: ChatBackendError) -> JSONResponse:
    status_code = status_for(exc)
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
        logger.info(
            "Rejected %s %s: %s", request.method, request.url.path, exc.reason or exc.message
        )
    return JSONResponse(status_code=status_code, content={"error": exc.message}, headers=headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the error-kind-to-status translation on the application."""
    app.add_exception_handler(ChatBackendError, chat_backend_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
