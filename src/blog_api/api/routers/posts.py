"""
blog_api.api.routers.posts

Post endpoints (all require a bearer token).

Responsibilities:
- List/create/show posts for any authenticated principal.
- Restrict update/delete to the post's owner or an administrator.
- Commit each write before the response is built, so clients never see
  success for a write that did not persist.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from blog_api.api.deps import db_session, post_service
from blog_api.api.envelope import success_response
from blog_api.api.pagination import PaginationParams
from blog_api.api.resources import PostResource, ResourceCollection
from blog_api.auth.deps import authorize_owner, get_principal
from blog_api.auth.models import Principal
from blog_api.db.repositories.base import Patch
from blog_api.services.post_service import PostService

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


class PostCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    body: str | None = None
    # Omitted or null: derived from the title.
    slug: str | None = Field(default=None, max_length=255)


class PostUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    body: str | None = None
    slug: str | None = Field(default=None, max_length=255)

    @field_validator("title", "slug")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        # Only runs for values the client actually sent.
        if value is None:
            raise ValueError("may not be null")
        return value


@router.get("")
async def list_posts(
    request: Request,
    pagination: PaginationParams = Depends(),
    principal: Principal = Depends(get_principal),
    posts: PostService = Depends(post_service),
) -> JSONResponse:
    page = await posts.list(pagination.per_page, pagination.page)
    collection = ResourceCollection(page, PostResource)
    return success_response(
        collection.to_list(request), "Posts retrieved", extra=collection.with_(request)
    )


@router.post("", status_code=HTTP_201_CREATED)
async def create_post(
    request: Request,
    body: PostCreateRequest,
    principal: Principal = Depends(get_principal),
    posts: PostService = Depends(post_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    data = body.model_dump(exclude_unset=True)
    data["user_id"] = principal.id
    post = await posts.create(data)
    await session.commit()
    resource = PostResource(post)
    return success_response(
        resource.to_dict(request),
        "Post created",
        status_code=HTTP_201_CREATED,
        extra=resource.with_(request),
    )


@router.get("/{post_id}")
async def show_post(
    request: Request,
    post_id: int,
    principal: Principal = Depends(get_principal),
    posts: PostService = Depends(post_service),
) -> JSONResponse:
    post = await posts.find(post_id)
    return success_response(PostResource(post).to_dict(request), "Post retrieved")


@router.put("/{post_id}")
async def update_post(
    request: Request,
    post_id: int,
    body: PostUpdateRequest,
    principal: Principal = Depends(get_principal),
    posts: PostService = Depends(post_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    post = await posts.find(post_id)
    authorize_owner(principal, post.owner_id)
    post = await posts.update(post, Patch.from_model(body))
    await session.commit()
    return success_response(PostResource(post).to_dict(request), "Post updated")


@router.delete("/{post_id}")
async def delete_post(
    post_id: int,
    principal: Principal = Depends(get_principal),
    posts: PostService = Depends(post_service),
    session: AsyncSession = Depends(db_session),
) -> JSONResponse:
    post = await posts.find(post_id)
    authorize_owner(principal, post.owner_id)
    await posts.delete(post)
    await session.commit()
    return success_response(None, "Post deleted")
