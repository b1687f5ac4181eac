from __future__ import annotations

import pytest

from blog_api.services.post_service import slugify


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Hello World", "hello-world"),
        ("  Hello,   World!  ", "hello-world"),
        ("Crème brûlée recipe", "creme-brulee-recipe"),
        ("snake_case and dots.too", "snake-case-and-dots-too"),
        ("already-a-slug", "already-a-slug"),
        ("Python 3.12 released", "python-3-12-released"),
        ("!!!", ""),
    ],
)
def test_slugify(title: str, expected: str) -> None:
    assert slugify(title) == expected


@pytest.mark.parametrize("title", ["Hello World", "  --Mixed__Case--  ", "Ünïcödé títle", "a.b.c"])
def test_slugify_is_idempotent(title: str) -> None:
    once = slugify(title)
    assert slugify(once) == once
