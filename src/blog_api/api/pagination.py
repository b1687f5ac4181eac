"""
blog_api.api.pagination

Reusable pagination query parameters for list endpoints.
"""

from __future__ import annotations

from fastapi import Query, Request


class PaginationParams:
    """
    FastAPI dependency parsing ``?page=`` and ``?per_page=``.

    Attributes
    ----------
    page:
        1-based page number (minimum 1).
    per_page:
        Items per page, or ``None`` to let the service apply its default.
        Clamped to ``settings.max_per_page`` regardless of what the caller sends.
    """

    def __init__(
        self,
        request: Request,
        page: int = Query(1, ge=1, description="Page number (1-based)."),
        per_page: int | None = Query(None, ge=1, description="Number of items per page."),
    ) -> None:
        max_per_page = request.app.state.settings.max_per_page
        self.page = page
        self.per_page = min(per_page, max_per_page) if per_page is not None else None
