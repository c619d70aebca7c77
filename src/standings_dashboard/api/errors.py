"""
Unified error handling for consistent API error responses.

All API errors use this format:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable message",
        "detail": "Optional additional context",
        "retryable": false
    }
}

Domain errors from the standings pipeline are converted by
``standings_error_handler`` so routes can let them propagate.
"""

from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from ..core.errors import (
    DataIntegrityError,
    NotFoundError as TeamNotFound,
    ParseError,
    RemoteError,
    StandingsError,
)


class APIError(HTTPException):
    """Base API error class for consistent error responses."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        detail: str | None = None,
        retryable: bool = False,
        headers: dict[str, str] | None = None,
    ):
        self.code = code
        self.message = message
        self.error_detail = detail
        self.retryable = retryable
        super().__init__(
            status_code=status_code,
            detail={"code": code, "message": message, "detail": detail},
            headers=headers,
        )


class NotFoundError(APIError):
    """Resource not found (404)."""

    def __init__(self, resource: str, identifier: Any, context: str | None = None):
        message = f"{resource} not found"
        detail = f"{resource} {identifier}"
        if context:
            detail = f"{detail} in {context}"
        super().__init__(
            status_code=404,
            code="NOT_FOUND",
            message=message,
            detail=detail,
        )


class ValidationError(APIError):
    """Invalid input (400)."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            status_code=400,
            code="VALIDATION_ERROR",
            message=message,
            detail=detail,
        )


class ExternalServiceError(APIError):
    """Standings source error (502)."""

    def __init__(self, service: str, message: str, retryable: bool = True, status_code: int = 502):
        super().__init__(
            status_code=status_code,
            code="EXTERNAL_API_ERROR",
            message=message,
            detail=f"Error from {service} API",
            retryable=retryable,
        )


def _content(exc: APIError) -> dict[str, Any]:
    content: dict[str, Any] = {
        "error": {
            "code": exc.code,
            "message": exc.message,
            "retryable": exc.retryable,
        }
    }
    if exc.error_detail:
        content["error"]["detail"] = exc.error_detail
    return content


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """
    FastAPI exception handler for APIError.

    Converts APIError exceptions to consistent JSON responses.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_content(exc),
        headers=exc.headers,
    )


def to_api_error(exc: StandingsError) -> APIError:
    """Map a domain error onto its HTTP representation."""
    if isinstance(exc, TeamNotFound):
        return NotFoundError(exc.resource, exc.identifier, context=exc.context)
    if isinstance(exc, RemoteError):
        return ExternalServiceError("MLB Stats", exc.message, retryable=exc.retryable)
    if isinstance(exc, ParseError):
        return ExternalServiceError("MLB Stats", "Malformed standings data", retryable=True)
    if isinstance(exc, DataIntegrityError):
        return ExternalServiceError("MLB Stats", exc.message, retryable=False)
    return APIError(status_code=500, code=exc.code, message=exc.message)


async def standings_error_handler(request: Request, exc: StandingsError) -> JSONResponse:
    """FastAPI exception handler for errors raised by the standings pipeline."""
    return await api_error_handler(request, to_api_error(exc))
