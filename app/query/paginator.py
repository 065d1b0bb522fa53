"""
app/query/paginator.py

Page window and response metadata for list requests.
"""

from __future__ import annotations

import math

from app.domain.mobile_post import PageWindow
from app.schemas.envelope import PageMeta
from app.validators.mobile_post_validator import validate_pagination


def build_window(page: int, limit: int) -> PageWindow:
    """
    Bounds-check page/limit and describe the slice to fetch.
    """

    return validate_pagination(page, limit)


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def build_page_meta(window: PageWindow, total: int) -> PageMeta:
    return PageMeta(
        total=total,
        page=window.page,
        limit=window.limit,
        total_pages=total_pages(total, window.limit),
    )
