"""Domain errors and the handlers that turn every failure into a JSON body.

Errors leave the API as ``{"code", "message", "details"}``. The request id is
folded into ``details`` and echoed in the ``X-Request-ID`` header.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER, bind_request, restore
from .schemas.system import ErrorResponse

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for errors raised by the services.

    Subclasses pick their default ``code`` and ``status_code``; both can be
    overridden per instance.
    """

    code = "application_error"
    status_code = status.HTTP_400_BAD_REQUEST
    headers: dict[str, str] | None = None

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApplicationError):
    """A required field is missing or empty."""

    code = "validation_error"


class ConflictError(ApplicationError):
    """The email or username is already registered."""

    code = "conflict"


class InvalidCredentialsError(ApplicationError):
    """Login failure.

    Unknown emails and wrong passwords share one message and a 400 status so
    callers cannot tell which of the two occurred.
    """

    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class UnauthorizedError(ApplicationError):
    """Missing, malformed or expired session credential."""

    code = "unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class NotFoundError(ApplicationError):
    """Unknown task or user; also used for tasks owned by someone else."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


def _error_body(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        if details is None:
            details = {"request_id": request_id}
        elif isinstance(details, dict):
            details = {"request_id": request_id, **details}
        else:
            details = {"request_id": request_id, "detail": details}
    body = ErrorResponse(code=code, message=message, details=details)
    response = JSONResponse(body.model_dump(mode="json"), status_code=status_code, headers=headers)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


async def _on_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
    logger.info("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return _error_body(request, exc.status_code, exc.code, exc.message, exc.details, exc.headers)


async def _on_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    logger.info("Rejected malformed body on %s %s", request.method, request.url.path)
    return _error_body(
        request,
        status.HTTP_400_BAD_REQUEST,
        "validation_error",
        "Request validation failed.",
        {"errors": errors},
    )


async def _on_duplicate_key(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    # Only users carry unique indexes (email, username).
    key = (exc.details or {}).get("keyValue")
    logger.warning("Unique index violated on %s", request.url.path, extra={"key": key})
    return _error_body(request, status.HTTP_400_BAD_REQUEST, "conflict", "Email or username already used")


async def _on_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        http_status = HTTPStatus(exc.status_code)
    except ValueError:
        code, phrase = "http_error", "Error"
    else:
        code, phrase = http_status.name.lower(), http_status.phrase
    if isinstance(exc.detail, str):
        message, details = exc.detail, None
    else:
        message, details = phrase, exc.detail
    return _error_body(request, exc.status_code, code, message, details, exc.headers)


async def _on_unhandled(request: Request, exc: Exception) -> JSONResponse:
    # Runs in ServerErrorMiddleware, after the request context was torn down.
    request_id = getattr(request.state, "request_id", None)
    token = bind_request(request_id) if request_id else None
    try:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    finally:
        if token is not None:
            restore(token)
    return _error_body(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "server_error",
        "Server error",
        {"error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, _on_application_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _on_request_validation)  # type: ignore[arg-type]
    app.add_exception_handler(DuplicateKeyError, _on_duplicate_key)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _on_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _on_unhandled)


__all__ = [
    "ApplicationError",
    "ConflictError",
    "InvalidCredentialsError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "register_exception_handlers",
]
