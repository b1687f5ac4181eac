"""
blog_api.api.envelope

Uniform JSON response envelope.

Every response body has the shape::

    {"success": bool, "message": str, "data": any | null, "errors": any | null}

List responses add a top-level ``meta`` block (see `resources.base.ResourceCollection`).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.status import HTTP_200_OK


def envelope(
    *,
    success: bool,
    message: str = "",
    data: Any = None,
    errors: Any = None,
    extra: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "success": success,
        "message": message,
        "data": data,
        "errors": errors,
    }
    if extra:
        body.update(extra)
    return body


def success_response(
    data: Any = None,
    message: str = "",
    *,
    status_code: int = HTTP_200_OK,
    extra: Mapping[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope(success=True, message=message, data=data, extra=extra)),
    )


def error_response(
    message: str,
    *,
    status_code: int,
    errors: Any = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope(success=False, message=message, errors=errors)),
        headers=dict(headers) if headers else None,
    )
