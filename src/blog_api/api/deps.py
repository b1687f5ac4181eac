"""
blog_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Encapsulate app.state access patterns (settings/engine/sessionmaker).
- Build request-scoped collaborators (auth gateway, services).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_api.auth.gateway import JwtAuthGateway
from blog_api.db.repositories.posts import PostRepo
from blog_api.db.repositories.users import UserRepo
from blog_api.services.auth_service import AuthService
from blog_api.services.post_service import PostService
from blog_api.services.user_service import UserService
from blog_api.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are stored on app.state by `blog_api.api.app.create_app`.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created during the app lifespan in `blog_api.api.app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped unit of work. Mutating routes commit before building their response;
    # the commit below only persists read-path bookkeeping such as token `last_used_at`.
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def auth_gateway(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> JwtAuthGateway:
    return JwtAuthGateway(session=session, settings=settings)


def post_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> PostService:
    return PostService(PostRepo(session), default_per_page=settings.default_per_page)


def user_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> UserService:
    return UserService(
        UserRepo(session),
        default_per_page=settings.default_per_page,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def auth_service(
    users: UserService = Depends(user_service),
    gateway: JwtAuthGateway = Depends(auth_gateway),
) -> AuthService:
    return AuthService(users=users, gateway=gateway)


# --- Module Notes -----------------------------------------------------------
# FastAPI caches dependencies per request, so every collaborator above shares the
# single `db_session` of that request. Code after `yield` may run once the response
# is already sent, so a failure there can no longer reach the client.
