from __future__ import annotations

from typing import Any

from fastapi import Request

from blog_api.api.resources.base import BaseResource, isoformat
from blog_api.db.models import Post


class PostResource(BaseResource[Post]):
    def to_dict(self, request: Request | None = None) -> dict[str, Any]:
        post = self.entity
        return {
            "id": post.id,
            "user_id": post.user_id,
            "title": post.title,
            "slug": post.slug,
            "body": post.body,
            "created_at": isoformat(post.created_at),
            "updated_at": isoformat(post.updated_at),
        }
