from __future__ import annotations

from typing import Any

from fastapi import Request

from blog_api.api.resources.base import BaseResource, isoformat
from blog_api.db.models import User


class UserResource(BaseResource[User]):
    # `password_hash` is never emitted.
    def to_dict(self, request: Request | None = None) -> dict[str, Any]:
        user = self.entity
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "is_admin": user.is_admin,
            "created_at": isoformat(user.created_at),
            "updated_at": isoformat(user.updated_at),
        }


class TokenResource(BaseResource[User]):
    """A freshly issued bearer token together with its owner."""

    def __init__(self, user: User, token: str) -> None:
        super().__init__(user)
        self.token = token

    def to_dict(self, request: Request | None = None) -> dict[str, Any]:
        return {
            "user": UserResource(self.entity).to_dict(request),
            "access_token": self.token,
            "token_type": "bearer",
        }
