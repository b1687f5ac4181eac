"""
blog_api.db.repositories.base

Generic repository contract and its SQLAlchemy implementation.

Responsibilities:
- Define `Repository[T]`, the persistence protocol services depend on.
- Define `Page[T]` (pagination result) and `Patch` (explicit partial update).
- Implement create/find/update/delete/paginate once for every ORM entity.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.base import Base
from blog_api.errors import ConflictError, NotFoundError, ValidationError

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=Base)


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        # An empty result still has one (empty) page.
        return max(1, math.ceil(self.total / self.per_page))


@dataclass(frozen=True, slots=True)
class Patch:
    """
    The fields a caller intends to change, and nothing else.

    Built from a request model with `Patch.from_model`, which keeps only the
    fields the client actually sent, so unset fields never overwrite stored
    values with defaults.
    """

    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_model(cls, model: BaseModel) -> Patch:
        return cls(model.model_dump(exclude_unset=True))

    def without(self, *names: str) -> Patch:
        return Patch({k: v for k, v in self.fields.items() if k not in names})

    def replace(self, **changes: Any) -> Patch:
        return Patch({**self.fields, **changes})

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __bool__(self) -> bool:
        return bool(self.fields)


class Repository(Protocol[T]):
    async def paginate(self, per_page: int, page: int = 1) -> Page[T]: ...

    async def create(self, fields: Mapping[str, Any]) -> T: ...

    async def find_by_id(self, id: Any) -> T: ...

    async def update(self, id: Any, patch: Patch) -> T: ...

    async def delete(self, id: Any) -> bool: ...

    async def refresh(self, entity: T) -> T: ...


class SqlAlchemyRepository(Generic[ModelT]):
    """
    Thin gateway over one ORM model. Subclasses only set `model` (and
    optionally `entity_name` for error messages) and add entity-specific finders.

    Writes are flushed, never committed; the request-scoped session owns the
    transaction boundary.
    """

    model: ClassVar[type[Base]]
    entity_name: ClassVar[str] = "Resource"

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def paginate(self, per_page: int, page: int = 1) -> Page[ModelT]:
        if per_page < 1:
            raise ValidationError.for_field("per_page", "The per page must be at least 1.")
        if page < 1:
            raise ValidationError.for_field("page", "The page must be at least 1.")

        total = (
            await self._session.execute(select(func.count()).select_from(self.model))
        ).scalar_one()
        # Primary-key order keeps pages stable across calls absent mutation.
        stmt = (
            select(self.model)
            .order_by(self._pk_column())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        items = list((await self._session.execute(stmt)).scalars().all())
        return Page(items=items, total=total, page=page, per_page=per_page)

    async def create(self, fields: Mapping[str, Any]) -> ModelT:
        entity = self.model(**dict(fields))
        self._session.add(entity)
        await self._flush()
        return entity  # type: ignore[return-value]

    async def get(self, id: Any) -> ModelT | None:
        return await self._session.get(self.model, id)  # type: ignore[return-value]

    async def find_by_id(self, id: Any) -> ModelT:
        entity = await self.get(id)
        if entity is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return entity

    async def update(self, id: Any, patch: Patch) -> ModelT:
        entity = await self.find_by_id(id)
        for name, value in patch.fields.items():
            setattr(entity, name, value)
        await self._flush()
        return entity

    async def delete(self, id: Any) -> bool:
        entity = await self.get(id)
        if entity is None:
            return False
        await self._session.delete(entity)
        await self._session.flush()
        return True

    async def refresh(self, entity: ModelT) -> ModelT:
        await self._session.refresh(entity)
        return entity

    def _pk_column(self):
        return self.model.__mapper__.primary_key[0]

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            # The failed flush leaves the session unusable; reset it before reporting.
            await self._session.rollback()
            raise ConflictError(f"{self.entity_name} conflicts with an existing record") from e


# --- Module Notes -----------------------------------------------------------
# Repositories are intentionally thin; business rules (slugging, hashing,
# authorization) belong in services and routers.
