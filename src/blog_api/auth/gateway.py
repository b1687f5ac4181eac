"""
blog_api.auth.gateway

Bearer-token gateway.

Responsibilities:
- Define the `AuthGateway` protocol consumed by services and auth dependencies.
- Implement it with signed JWTs plus a personal-access-token table, so tokens
  can be revoked individually or per user.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, issue_token
from blog_api.auth.models import ADMIN_ROLE, Principal
from blog_api.db.models import User
from blog_api.db.repositories.tokens import TokenRepo
from blog_api.db.repositories.users import UserRepo
from blog_api.errors import AuthError
from blog_api.observability.logging import get_logger
from blog_api.settings import Settings

log = get_logger(__name__)


class AuthGateway(Protocol):
    async def issue_token(self, user: User, *, name: str = "api") -> str: ...

    async def resolve_principal(self, token: str) -> Principal: ...

    async def revoke(self, principal: Principal) -> bool: ...

    async def revoke_all(self, user_id: int) -> int: ...


def principal_for(user: User, *, token_id: str | None = None) -> Principal:
    roles = frozenset({ADMIN_ROLE}) if user.is_admin else frozenset()
    return Principal(id=user.id, email=user.email, roles=roles, token_id=token_id)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class JwtAuthGateway:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._cfg = JwtConfig.from_settings(settings)
        self._ttl = timedelta(minutes=settings.token_ttl_minutes)
        self._tokens = TokenRepo(session)
        self._users = UserRepo(session)

    async def issue_token(self, user: User, *, name: str = "api") -> str:
        now = _utcnow()
        token_id = uuid.uuid4().hex
        await self._tokens.create(
            {
                "id": token_id,
                "user_id": user.id,
                "name": name,
                "created_at": now.replace(tzinfo=None),
                "expires_at": (now + self._ttl).replace(tzinfo=None),
            }
        )
        log.info("auth.token_issued", user_id=user.id, token_name=name)
        return issue_token(
            cfg=self._cfg,
            subject=str(user.id),
            token_id=token_id,
            roles=sorted(principal_for(user).roles),
            ttl=self._ttl,
            now=now,
        )

    async def resolve_principal(self, token: str) -> Principal:
        try:
            # Authn: validate signature and registered claims (iss/aud/exp/sub/jti).
            payload = decode_and_validate(cfg=self._cfg, token=token)
        except JwtValidationError as e:
            raise AuthError(f"Invalid token: {e}") from e

        token_id = str(payload.get("jti", ""))
        try:
            user_id = int(payload.get("sub", ""))
        except (TypeError, ValueError) as e:
            raise AuthError("Invalid token subject") from e

        now = _utcnow().replace(tzinfo=None)
        row = await self._tokens.find_active(token_id, now=now)
        if row is None or row.user_id != user_id:
            raise AuthError("Token has been revoked or has expired")

        user = await self._users.get(user_id)
        if user is None:
            raise AuthError("Token subject no longer exists")

        await self._tokens.touch(row, now=now)
        # Roles come from the current user row, not the (possibly stale) token claims.
        return principal_for(user, token_id=token_id)

    async def revoke(self, principal: Principal) -> bool:
        if principal.token_id is None:
            return False
        revoked = await self._tokens.delete(principal.token_id)
        log.info("auth.token_revoked", user_id=principal.id, revoked=revoked)
        return revoked

    async def revoke_all(self, user_id: int) -> int:
        count = await self._tokens.delete_for_user(user_id)
        log.info("auth.tokens_revoked", user_id=user_id, count=count)
        return count


# --- Module Notes -----------------------------------------------------------
# Everything outside this module treats the token string as opaque.
