"""
blog_api.api.handlers

Exception handlers: the single place where errors become HTTP responses.

Responsibilities:
- Map `AppError` subclasses to their status code and the error envelope.
- Map request validation failures to 422 with field-level messages.
- Wrap framework HTTP errors (404 route, 405 method) in the same envelope.
- Report anything else (a failed commit, a driver error) as an enveloped 500.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR

from blog_api.api.envelope import error_response
from blog_api.errors import AppError, ValidationError
from blog_api.observability.logging import get_logger

log = get_logger(__name__)


def _field_name(loc: Sequence[Any]) -> str:
    # Drop the request part ("body", "query", ...) so clients see plain field names.
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def validation_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = defaultdict(list)
    for err in exc.errors():
        errors[_field_name(err.get("loc", ()))].append(str(err.get("msg", "Invalid value")))
    return dict(errors)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log.info(
        "request.rejected",
        error=type(exc).__name__,
        status_code=exc.status_code,
        reason=exc.message,
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == HTTP_401_UNAUTHORIZED else None
    return error_response(
        exc.message, status_code=exc.status_code, errors=exc.errors, headers=headers
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        "The given data was invalid",
        status_code=ValidationError.status_code,
        errors=validation_errors(exc),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(
        str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None)
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("request.failed", error=type(exc).__name__)
    return error_response("Server error", status_code=HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)


# --- Module Notes -----------------------------------------------------------
# Repositories and services only raise; nothing below the routers builds responses.
