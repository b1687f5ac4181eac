"""
blog_api.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) passed explicitly from
  routers into services.
"""

from __future__ import annotations

from dataclasses import dataclass

ADMIN_ROLE = "admin"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.
    """

    id: int
    email: str
    roles: frozenset[str]
    # Token used for the current request; `None` for principals built outside a request.
    token_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles

    def owns(self, owner_id: int) -> bool:
        return self.id == owner_id

    def can_manage(self, owner_id: int) -> bool:
        return self.owns(owner_id) or self.is_admin


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; credentials never live on the Principal.
