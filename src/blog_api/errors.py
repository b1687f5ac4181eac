"""
blog_api.errors

Application error taxonomy.

Responsibilities:
- Define the errors raised by repositories, services and the auth gateway.
- Carry the HTTP status each error maps to; translation to a response happens
  only in the API layer (`blog_api.api.handlers`).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_CONTENT,
)


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: str | None = None, *, errors: Any = None) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input. `errors` maps field name -> list of messages."""

    status_code = HTTP_422_UNPROCESSABLE_CONTENT
    default_message = "The given data was invalid"

    def __init__(
        self,
        message: str | None = None,
        *,
        errors: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        super().__init__(
            message, errors={k: list(v) for k, v in (errors or {}).items()}
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationError:
        return cls(message, errors={field: [message]})


class NotFoundError(AppError):
    status_code = HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class AuthError(AppError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated"


class ForbiddenError(AppError):
    status_code = HTTP_403_FORBIDDEN
    default_message = "This action is unauthorized"


class ConflictError(AppError):
    status_code = HTTP_409_CONFLICT
    default_message = "Resource conflicts with an existing record"
