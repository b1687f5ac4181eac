"""
User service: account CRUD.

Plain-text passwords never reach the repository: ``create`` and ``update``
replace a ``password`` field with its bcrypt ``password_hash``.  Emails are
normalised to lowercase and checked for uniqueness up front so the client
gets a field-level 422 instead of a bare conflict.
"""

from __future__ import annotations

import secrets
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from blog_api.auth.password import hash_password, verify_password
from blog_api.db.models import User
from blog_api.db.repositories.base import Patch
from blog_api.db.repositories.users import UserRepo
from blog_api.errors import ValidationError
from blog_api.observability.logging import get_logger
from blog_api.services.base import DEFAULT_PER_PAGE, CrudService

log = get_logger(__name__)


@lru_cache
def _unknown_user_hash(rounds: int) -> str:
    return hash_password(secrets.token_urlsafe(16), rounds=rounds)


class UserService(CrudService[User]):
    def __init__(
        self,
        users: UserRepo,
        *,
        default_per_page: int = DEFAULT_PER_PAGE,
        bcrypt_rounds: int = 12,
    ) -> None:
        super().__init__(users, default_per_page=default_per_page)
        self._users = users
        self._bcrypt_rounds = bcrypt_rounds

    async def find_by_email(self, email: str) -> User | None:
        return await self._users.find_by_email(email)

    async def create(self, data: Mapping[str, Any]) -> User:
        fields = dict(data)
        fields["email"] = await self._unique_email(fields["email"])
        fields["password_hash"] = self._hash(fields.pop("password"))

        user = await super().create(fields)
        log.info("user.created", user_id=user.id, is_admin=user.is_admin)
        return user

    async def update(self, entity: User, patch: Patch) -> User:
        if "email" in patch:
            patch = patch.replace(
                email=await self._unique_email(patch.fields["email"], ignore_id=entity.id)
            )
        if "password" in patch:
            patch = patch.without("password").replace(
                password_hash=self._hash(patch.fields["password"])
            )

        user = await super().update(entity, patch)
        log.info("user.updated", user_id=user.id, fields=sorted(patch))
        return user

    async def delete(self, entity: User) -> bool:
        deleted = await super().delete(entity)
        log.info("user.deleted", user_id=entity.id, deleted=deleted)
        return deleted

    def check_password(self, user: User | None, password: str) -> bool:
        # Unknown accounts still pay for one bcrypt check so login timing does not
        # reveal which emails are registered.
        if user is None:
            verify_password(password, _unknown_user_hash(self._bcrypt_rounds))
            return False
        return verify_password(password, user.password_hash)

    def _hash(self, password: str) -> str:
        return hash_password(password, rounds=self._bcrypt_rounds)

    async def _unique_email(self, email: str, *, ignore_id: int | None = None) -> str:
        normalized = email.strip().lower()
        existing = await self._users.find_by_email(normalized)
        if existing is not None and existing.id != ignore_id:
            raise ValidationError.for_field("email", "The email has already been taken.")
        return normalized
