"""
blog_api.services.auth_service

Account-level auth flows for the current principal.

Responsibilities:
- Exchange credentials for a bearer token (login).
- Read and update the principal's own profile.
- Change password (revoking every existing token) and log out.
"""

from __future__ import annotations

from blog_api.auth.gateway import AuthGateway
from blog_api.auth.models import Principal
from blog_api.db.models import User
from blog_api.db.repositories.base import Patch
from blog_api.errors import AuthError, ValidationError
from blog_api.observability.logging import get_logger
from blog_api.services.user_service import UserService

log = get_logger(__name__)

# Fields a user may change on their own profile.
PROFILE_FIELDS = frozenset({"name", "email"})


class AuthService:
    def __init__(self, *, users: UserService, gateway: AuthGateway) -> None:
        self._users = users
        self._gateway = gateway

    async def login(self, *, email: str, password: str, device_name: str = "api") -> tuple[User, str]:
        user = await self._users.find_by_email(email)
        password_ok = self._users.check_password(user, password)
        if user is None or not password_ok:
            log.info("auth.login_failed")
            raise AuthError("Invalid credentials")

        token = await self._gateway.issue_token(user, name=device_name)
        log.info("auth.login", user_id=user.id)
        return user, token

    async def me(self, principal: Principal) -> User:
        return await self._users.find(principal.id)

    async def update_profile(self, principal: Principal, patch: Patch) -> User:
        user = await self._users.find(principal.id)
        return await self._users.update(user, patch.without(*(set(patch) - PROFILE_FIELDS)))

    async def change_password(
        self, principal: Principal, *, current_password: str, new_password: str
    ) -> str:
        user = await self._users.find(principal.id)
        if not self._users.check_password(user, current_password):
            raise ValidationError.for_field(
                "current_password", "The current password is incorrect."
            )

        user = await self._users.update(user, Patch({"password": new_password}))
        # Every session signed with the old password ends here, including the caller's.
        await self._gateway.revoke_all(user.id)
        return await self._gateway.issue_token(user, name="password-change")

    async def logout(self, principal: Principal) -> bool:
        revoked = await self._gateway.revoke(principal)
        log.info("auth.logout", user_id=principal.id)
        return revoked
