"""
blog_api.services.base

Generic CRUD service over a `Repository[T]`.

Responsibilities:
- Apply the default page size to list calls.
- Return freshly reloaded entities after updates.
- Let repository errors (`NotFoundError`, `ConflictError`) propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, Protocol, TypeVar

from blog_api.db.repositories.base import Page, Patch, Repository

DEFAULT_PER_PAGE = 15


class HasId(Protocol):
    id: Any


EntityT = TypeVar("EntityT", bound=HasId)


class CrudService(Generic[EntityT]):
    def __init__(
        self, repository: Repository[EntityT], *, default_per_page: int = DEFAULT_PER_PAGE
    ) -> None:
        self._repository = repository
        self._default_per_page = default_per_page

    async def list(self, per_page: int | None = None, page: int = 1) -> Page[EntityT]:
        return await self._repository.paginate(
            self._default_per_page if per_page is None else per_page, page
        )

    async def create(self, data: Mapping[str, Any]) -> EntityT:
        return await self._repository.create(data)

    async def find(self, id: Any) -> EntityT:
        return await self._repository.find_by_id(id)

    async def update(self, entity: EntityT, patch: Patch) -> EntityT:
        await self._repository.update(entity.id, patch)
        # Callers observe persisted state (including onupdate columns), not their input object.
        return await self._repository.refresh(await self._repository.find_by_id(entity.id))

    async def delete(self, entity: EntityT) -> bool:
        return await self._repository.delete(entity.id)
