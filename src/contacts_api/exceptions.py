"""Exceptions raised by the HTTP layer and the handlers that render them.

Every error response has the shape ``{"message": str}``; a few add extra
context keys (the empty-page 404 carries ``page`` and ``limit``).
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ContactsApiError(Exception):
    """Base exception for the contacts API.

    Carries the HTTP status code so a single exception handler can
    render every subclass.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"message": self.message, **self.details}


class BadRequestError(ContactsApiError):
    """Client input is malformed: missing or extra fields, pattern mismatch."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ContactsApiError):
    """No record matches the identifier, or a page query returned nothing."""

    status_code = status.HTTP_404_NOT_FOUND


class ServiceUnavailableError(ContactsApiError):
    """The contact store cannot be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def contacts_api_exception_handler(request: Request, exc: ContactsApiError) -> JSONResponse:
    """Render a ContactsApiError as JSON with its own status code."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render router-level errors (unknown route, wrong method) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any unexpected failure (e.g. store unavailable) as a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )
