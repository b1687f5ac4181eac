from __future__ import annotations

from datetime import datetime

from blog_api.api.resources import PostResource, ResourceCollection, UserResource
from blog_api.db.models import Post, User
from blog_api.db.repositories.base import Page


def _user() -> User:
    return User(
        id=3,
        name="Ann",
        email="ann@example.com",
        password_hash="$2b$secret",
        is_admin=False,
        created_at=datetime(2024, 1, 1, 12, 0),
        updated_at=datetime(2024, 1, 2, 12, 0),
    )


def test_user_resource_hides_credentials() -> None:
    data = UserResource(_user()).to_dict()
    assert "password_hash" not in data
    assert "$2b$secret" not in data.values()
    assert data["created_at"] == "2024-01-01T12:00:00"


def test_resource_with_is_empty_by_default() -> None:
    assert UserResource(_user()).with_() == {}


def test_post_resource_shape() -> None:
    post = Post(id=1, user_id=3, title="T", slug="t", body=None, created_at=None, updated_at=None)
    assert PostResource(post).to_dict() == {
        "id": 1,
        "user_id": 3,
        "title": "T",
        "slug": "t",
        "body": None,
        "created_at": None,
        "updated_at": None,
    }


def test_collection_meta() -> None:
    page = Page(items=[_user()], total=31, page=2, per_page=15)
    collection = ResourceCollection(page, UserResource)
    assert [u["id"] for u in collection.to_list()] == [3]
    assert collection.with_() == {
        "meta": {"current_page": 2, "per_page": 15, "total": 31, "last_page": 3}
    }
