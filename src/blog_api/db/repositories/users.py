from __future__ import annotations

from sqlalchemy import func, select

from blog_api.db.models import User
from blog_api.db.repositories.base import SqlAlchemyRepository


class UserRepo(SqlAlchemyRepository[User]):
    model = User
    entity_name = "User"

    async def find_by_email(self, email: str) -> User | None:
        # Emails are compared case-insensitively; they are stored lowercased by UserService.
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        return (await self._session.execute(stmt)).scalar_one_or_none()
