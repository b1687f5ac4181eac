"""
blog_api.api.resources

Presenters mapping entities to their public JSON shape.
"""

from blog_api.api.resources.base import BaseResource, ResourceCollection
from blog_api.api.resources.posts import PostResource
from blog_api.api.resources.users import TokenResource, UserResource

__all__ = [
    "BaseResource",
    "PostResource",
    "ResourceCollection",
    "TokenResource",
    "UserResource",
]
