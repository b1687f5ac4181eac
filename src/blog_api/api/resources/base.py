"""
blog_api.api.resources.base

Base presenter types.

Responsibilities:
- `BaseResource`: pure mapping of one entity to an ordered dict, plus optional
  top-level metadata (`with_`) that accompanies the primary payload.
- `ResourceCollection`: renders a `Page` and contributes pagination `meta`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, TypeVar

from fastapi import Request

from blog_api.db.repositories.base import Page

T = TypeVar("T")


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class BaseResource(ABC, Generic[T]):
    def __init__(self, entity: T) -> None:
        self.entity = entity

    @abstractmethod
    def to_dict(self, request: Request | None = None) -> dict[str, Any]:
        """Public fields of the entity, in output order."""

    def with_(self, request: Request | None = None) -> dict[str, Any]:
        """Top-level keys merged next to the envelope's `data`. Empty by default."""
        return {}


class ResourceCollection(Generic[T]):
    def __init__(self, page: Page[T], resource: type[BaseResource[T]]) -> None:
        self.page = page
        self.resource = resource

    def to_list(self, request: Request | None = None) -> list[dict[str, Any]]:
        return [self.resource(item).to_dict(request) for item in self.page.items]

    def with_(self, request: Request | None = None) -> dict[str, Any]:
        return {
            "meta": {
                "current_page": self.page.page,
                "per_page": self.page.per_page,
                "total": self.page.total,
                "last_page": self.page.last_page,
            }
        }
