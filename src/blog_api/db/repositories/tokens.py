"""
blog_api.db.repositories.tokens

Repository for `PersonalAccessToken` rows.

Responsibilities:
- Record issued tokens (one row per JWT `jti`).
- Look up live tokens and stamp their last use.
- Revoke one token or every token of a user.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select

from blog_api.db.models import PersonalAccessToken
from blog_api.db.repositories.base import SqlAlchemyRepository


class TokenRepo(SqlAlchemyRepository[PersonalAccessToken]):
    model = PersonalAccessToken
    entity_name = "Token"

    async def find_active(self, token_id: str, *, now: datetime) -> PersonalAccessToken | None:
        stmt = select(PersonalAccessToken).where(
            PersonalAccessToken.id == token_id,
            PersonalAccessToken.expires_at > now,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def touch(self, token: PersonalAccessToken, *, now: datetime) -> None:
        token.last_used_at = now
        await self._session.flush()

    async def delete_for_user(self, user_id: int) -> int:
        stmt = delete(PersonalAccessToken).where(PersonalAccessToken.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.rowcount or 0


# --- Module Notes -----------------------------------------------------------
# Expired rows are left in place; they fail `find_active` and are removed with the user.
