"""
Post service: business rules for the Post entity.

Design notes
------------
- The slug is derived from the title only at creation time and only when the
  caller did not supply one (key missing or ``None``).  An explicit empty
  string is kept as-is.  A title with no letters or digits cannot produce a
  slug and is rejected as a field-level ``ValidationError`` on ``title``.
- Updates never re-derive the slug, even when the title changes, so
  published URLs stay stable.
- Slug uniqueness is enforced by the database; a collision surfaces as
  ``ConflictError`` from the repository.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping
from typing import Any

from blog_api.db.models import Post
from blog_api.db.repositories.base import Patch, Repository
from blog_api.errors import ValidationError
from blog_api.observability.logging import get_logger
from blog_api.services.base import DEFAULT_PER_PAGE, CrudService

log = get_logger(__name__)

_SLUG_SEPARATOR_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """
    Return a URL-safe, lowercase slug derived from *text*.

    Accents are folded to ASCII, every run of other characters becomes a
    single hyphen, and leading/trailing hyphens are dropped.  Idempotent.
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _SLUG_SEPARATOR_RE.sub("-", folded.lower()).strip("-")


class PostService(CrudService[Post]):
    slug_field = "slug"
    slug_source_field = "title"

    def __init__(
        self, posts: Repository[Post], *, default_per_page: int = DEFAULT_PER_PAGE
    ) -> None:
        super().__init__(posts, default_per_page=default_per_page)

    async def create(self, data: Mapping[str, Any]) -> Post:
        fields = dict(data)
        if fields.get(self.slug_field) is None:
            slug = slugify(str(fields.get(self.slug_source_field, "")))
            if not slug:
                raise ValidationError.for_field(
                    self.slug_source_field,
                    "The title must contain at least one letter or digit.",
                )
            fields[self.slug_field] = slug

        post = await super().create(fields)
        log.info("post.created", post_id=post.id, user_id=post.user_id, slug=post.slug)
        return post

    async def update(self, entity: Post, patch: Patch) -> Post:
        post = await super().update(entity, patch)
        log.info("post.updated", post_id=post.id, fields=sorted(patch))
        return post

    async def delete(self, entity: Post) -> bool:
        deleted = await super().delete(entity)
        log.info("post.deleted", post_id=entity.id, deleted=deleted)
        return deleted
