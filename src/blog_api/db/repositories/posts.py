from __future__ import annotations

from blog_api.db.models import Post
from blog_api.db.repositories.base import SqlAlchemyRepository


class PostRepo(SqlAlchemyRepository[Post]):
    model = Post
    entity_name = "Post"
