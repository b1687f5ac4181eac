"""
blog_api.api.routers.users

User administration endpoints.

Responsibilities:
- Admin-only listing, creation and deletion of users.
- Show/update for the user themself or an administrator; only administrators
  may grant or revoke the admin flag or set a password here.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from blog_api.api.deps import auth_gateway, db_session, user_service
from blog_api.api.envelope import success_response
from blog_api.api.pagination import PaginationParams
from blog_api.api.resources import ResourceCollection, UserResource
from blog_api.auth.deps import authorize_owner, get_principal, require_admin
from blog_api.auth.gateway import AuthGateway
from blog_api.auth.models import Principal
from blog_api.db.repositories.base import Patch
from blog_api.errors import ForbiddenError
from blog_api.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=128)
    is_admin: bool = False


class UserUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    password: str | None = Field(default=None, min_length=8, max_length=128)
    is_admin: bool | None = None

    @field_validator("name", "email", "password", "is_admin")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


@router.get("")
async def list_users(
    request: Request,
    pagination: PaginationParams = Depends(),
    principal: Principal = Depends(require_admin),
    users: UserService = Depends(user_service),
) -> JSONResponse:
    page = await users.list(pagination.per_page, pagination.page)
    collection = ResourceCollection(page, UserResource)
    return success_response(
        collection.to_list(request), "Users retrieved", extra=collection.with_(request)
    )


@router.post("", status_code=HTTP_201_CREATED)
async def create_user(
    request: Request,
    body: UserCreateRequest,
    principal: Principal = Depends(require_admin),
    users: UserService = Depends(user_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    user = await users.create(body.model_dump())
    await session.commit()
    return success_response(
        UserResource(user).to_dict(request), "User created", status_code=HTTP_201_CREATED
    )


@router.get("/{user_id}")
async def show_user(
    request: Request,
    user_id: int,
    principal: Principal = Depends(get_principal),
    users: UserService = Depends(user_service),
) -> JSONResponse:
    user = await users.find(user_id)
    authorize_owner(principal, user.id)
    return success_response(UserResource(user).to_dict(request), "User retrieved")


@router.put("/{user_id}")
async def update_user(
    request: Request,
    user_id: int,
    body: UserUpdateRequest,
    principal: Principal = Depends(get_principal),
    users: UserService = Depends(user_service),
    gateway: AuthGateway = Depends(auth_gateway),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    user = await users.find(user_id)
    authorize_owner(principal, user.id)
    patch = Patch.from_model(body)
    if "is_admin" in patch and not principal.is_admin:
        raise ForbiddenError("Only administrators may change the admin flag")
    if "password" in patch and not principal.is_admin:
        # Self-service password changes must prove the current password.
        raise ForbiddenError("Use /api/v1/auth/change-password to change your password")

    user = await users.update(user, patch)
    if "password" in patch:
        # An administrator reset ends every session of the target user.
        await gateway.revoke_all(user.id)
    await session.commit()
    return success_response(UserResource(user).to_dict(request), "User updated")


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    principal: Principal = Depends(require_admin),
    users: UserService = Depends(user_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    user = await users.find(user_id)
    await users.delete(user)
    await session.commit()
    return success_response(None, "User deleted")
