"""
blog_api.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal` via the `AuthGateway`.
- Enforce admin-only routes and owner-or-admin checks.
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blog_api.api.deps import auth_gateway
from blog_api.auth.gateway import AuthGateway
from blog_api.auth.models import Principal
from blog_api.errors import AuthError, ForbiddenError

_bearer = HTTPBearer(auto_error=False)


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    gateway: AuthGateway = Depends(auth_gateway),
) -> Principal:
    # Authn: require a bearer token.
    if creds is None or not creds.credentials:
        raise AuthError("Missing bearer token")
    return await gateway.resolve_principal(creds.credentials)


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise ForbiddenError("Administrator access required")
    return principal


def authorize_owner(principal: Principal, owner_id: int) -> None:
    """Raise `ForbiddenError` unless the principal owns the target or is an admin."""
    if not principal.can_manage(owner_id):
        raise ForbiddenError()


# --- Module Notes -----------------------------------------------------------
# Routers resolve the target entity first (404) and then call `authorize_owner` (403),
# so authentication failures (401) always win.
