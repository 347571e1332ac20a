"""Interface layer errors and their HTTP translation."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from together.adapter.error import ProviderError, WebhookSignatureError
from together.domain.error import (
    AuthenticationError,
    ConflictError,
    DomainError,
    InvitationError,
    NotAuthorizedError,
    NotFoundError,
    RepositoryError,
    ValidationError,
    WebhookEventError,
)

logger = logging.getLogger(__name__)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class BadRequestError(InterfaceError):
    """Request could not be interpreted."""

    pass


# First match wins, so subclasses come before their bases
_STATUS_BY_ERROR: list[tuple[type[Exception], int, str]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "validation_error"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "authentication_failed"),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN, "not_authorized"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (ConflictError, status.HTTP_409_CONFLICT, "conflict"),
    (InvitationError, status.HTTP_409_CONFLICT, "invitation_error"),
    (WebhookEventError, status.HTTP_400_BAD_REQUEST, "invalid_event"),
    (RepositoryError, status.HTTP_502_BAD_GATEWAY, "platform_error"),
    (WebhookSignatureError, status.HTTP_400_BAD_REQUEST, "invalid_signature"),
    (ProviderError, status.HTTP_502_BAD_GATEWAY, "provider_error"),
    (BadRequestError, status.HTTP_400_BAD_REQUEST, "bad_request"),
]


def status_for(error: Exception) -> tuple[int, str]:
    """HTTP status and error code for an exception raised by a use case."""
    for error_type, status_code, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code, getattr(error, "code", code)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"


async def _handle(request: Request, exc: Exception) -> JSONResponse:
    status_code, code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": code},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Translate layered errors into JSON responses."""
    for error_type in (DomainError, ProviderError, WebhookSignatureError, InterfaceError):
        app.add_exception_handler(error_type, _handle)
