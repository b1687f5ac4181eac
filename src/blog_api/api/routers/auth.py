"""
blog_api.api.routers.auth

Token-based authentication endpoints.

Responsibilities:
- Public login (credentials -> bearer token).
- Current-principal endpoints: profile read/update, password change, logout.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationInfo, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.api.deps import auth_service, db_session
from blog_api.api.envelope import success_response
from blog_api.api.resources import TokenResource, UserResource
from blog_api.api.routers.users import EMAIL_PATTERN
from blog_api.auth.deps import get_principal
from blog_api.auth.models import Principal
from blog_api.db.repositories.base import Patch
from blog_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    device_name: str = Field(default="api", min_length=1, max_length=255)


class ProfileUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)

    @field_validator("name", "email")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("may not be null")
        return value


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8, max_length=128)
    new_password_confirmation: str

    @field_validator("new_password_confirmation")
    @classmethod
    def _confirmed(cls, value: str, info: ValidationInfo) -> str:
        if value != info.data.get("new_password"):
            raise ValueError("The new password confirmation does not match")
        return value


@router.post("/login")
async def login(
    request: Request,
    body: LoginRequest,
    auth: AuthService = Depends(auth_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    user, token = await auth.login(
        email=body.email, password=body.password, device_name=body.device_name
    )
    await session.commit()
    return success_response(TokenResource(user, token).to_dict(request), "Login successful")


@router.get("/me")
async def me(
    request: Request,
    principal: Principal = Depends(get_principal),
    auth: AuthService = Depends(auth_service),
) -> JSONResponse:
    user = await auth.me(principal)
    return success_response(UserResource(user).to_dict(request), "Authenticated user")


@router.put("/profile")
async def update_profile(
    request: Request,
    body: ProfileUpdateRequest,
    principal: Principal = Depends(get_principal),
    auth: AuthService = Depends(auth_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    user = await auth.update_profile(principal, Patch.from_model(body))
    await session.commit()
    return success_response(UserResource(user).to_dict(request), "Profile updated")


@router.post("/change-password")
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    principal: Principal = Depends(get_principal),
    auth: AuthService = Depends(auth_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    token = await auth.change_password(
        principal, current_password=body.current_password, new_password=body.new_password
    )
    user = await auth.me(principal)
    await session.commit()
    return success_response(
        TokenResource(user, token).to_dict(request),
        "Password changed; all other sessions have been signed out",
    )


@router.post("/logout")
async def logout(
    principal: Principal = Depends(get_principal),
    auth: AuthService = Depends(auth_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    await auth.logout(principal)
    await session.commit()
    return success_response(None, "Logged out")
