"""Error taxonomy and exception handler registration."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from manager_api.schemas.envelope import ResultEnvelope
from manager_api.schemas.envelope import failure

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Login and/or password are incorrect."
MISSING_TOKEN_MESSAGE = "A valid bearer token is required to access this resource."
APPLICATION_ERROR_MESSAGE = "An internal application error occurred, please try again."
REQUEST_VALIDATION_MESSAGE = "The request is invalid, please correct it."


class APIError(Exception):
    """Base application exception translated to a failed envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str, errors: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = list(errors) if errors else None


class DomainValidationError(APIError):
    """Business-rule violation raised by the service layer."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(APIError):
    """Credential mismatch or missing/invalid bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = UNAUTHORIZED_MESSAGE) -> None:
        super().__init__(message)


class ApplicationError(APIError):
    """Unexpected failure surfaced as a 500 envelope."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = APPLICATION_ERROR_MESSAGE, errors: Sequence[str] | None = None) -> None:
        super().__init__(message, errors)


def _build_envelope_response(
    *,
    status_code: int,
    payload: ResultEnvelope,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"), headers=headers)


def _validation_errors(exc: RequestValidationError) -> list[str]:
    errors: list[str] = []
    for issue in exc.errors():
        field = _format_location(issue.get("loc", ()))
        message = str(issue.get("msg", "Invalid value"))
        errors.append(f"{field}: {message}")
    return errors


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    prefixes = {"body", "query", "path", "header", "cookie"}
    filtered = [str(part) for part in location if part not in prefixes]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to a 400 envelope."""

    return _build_envelope_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        payload=failure(REQUEST_VALIDATION_MESSAGE, _validation_errors(exc)),
    )


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP exceptions in the envelope.

    Only unknown routes (404) and unsupported methods (405) reach this handler;
    their status is kept, so these are the failures outside 400/401/500.
    """

    message = exc.detail if isinstance(exc.detail, str) and exc.detail else "Request failed"
    return _build_envelope_response(
        status_code=exc.status_code,
        payload=failure(message),
        headers=getattr(exc, "headers", None),
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Return typed application errors in the shared envelope."""

    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Application error on %s: %s", request.url.path, exc.message)
    return _build_envelope_response(
        status_code=exc.status_code,
        payload=failure(exc.message, exc.errors),
        headers=exc.headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Avoid leaking internal exceptions while keeping response shape stable."""

    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return _build_envelope_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        payload=failure(APPLICATION_ERROR_MESSAGE),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
