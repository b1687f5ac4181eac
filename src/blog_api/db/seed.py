"""
blog_api.db.seed

Bootstrap data.

Responsibilities:
- Ensure the configured administrator account exists (startup hook).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_api.db.models import User
from blog_api.db.repositories.base import Patch
from blog_api.db.repositories.users import UserRepo
from blog_api.db.session import session_scope
from blog_api.observability.logging import get_logger
from blog_api.services.user_service import UserService
from blog_api.settings import Settings

log = get_logger(__name__)


async def ensure_admin(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> User | None:
    """
    Create the bootstrap admin from `admin_email`/`admin_password`, or promote the
    existing account with that email. Returns `None` when not configured.
    """

    if not settings.admin_email or not settings.admin_password:
        return None

    async with session_scope(session_factory) as session:
        users = UserService(UserRepo(session), bcrypt_rounds=settings.bcrypt_rounds)
        existing = await users.find_by_email(settings.admin_email)
        if existing is not None:
            if not existing.is_admin:
                existing = await users.update(existing, Patch({"is_admin": True}))
                log.info("seed.admin_promoted", user_id=existing.id)
            return existing

        admin = await users.create(
            {
                "name": "Administrator",
                "email": settings.admin_email,
                "password": settings.admin_password,
                "is_admin": True,
            }
        )
        log.info("seed.admin_created", user_id=admin.id)
        return admin
