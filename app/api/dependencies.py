"""
app/api/dependencies.py

Shared FastAPI dependencies for request parsing and storage access.

Query parameters arrive as raw strings so that malformed values surface as
directory error codes instead of framework validation errors.
"""

from __future__ import annotations

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.config import get_listing_settings
from app.domain.mobile_post import Language, QueryFilterSpec
from app.query.sort_resolver import resolve_sort
from app.repositories.mobile_post_repository import MobilePostRepository, MobilePostStore
from app.validators.mobile_post_validator import (
    parse_int,
    validate_day_of_week,
    validate_language,
    validate_pagination,
    validate_time,
)
from db.session import get_db


def get_mobile_post_store(db: Session = Depends(get_db)) -> MobilePostStore:
    return MobilePostRepository(db)


def get_language(lang: str | None = Query(default=None)) -> Language:
    """
    Resolve the ``lang`` query parameter; absent means English.
    """

    if lang is None:
        return Language.EN
    return validate_language(lang)


def get_list_query(
    language: Language = Depends(get_language),
    search: str | None = Query(default=None),
    district: str | None = Query(default=None),
    day_of_week: str | None = Query(default=None, alias="dayOfWeek"),
    open_at: str | None = Query(default=None, alias="openAt"),
    mobile_code: str | None = Query(default=None, alias="mobileCode"),
    seq: str | None = Query(default=None),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_dir: str | None = Query(default=None, alias="sortDir"),
) -> QueryFilterSpec:
    """
    Parse and validate list parameters into a QueryFilterSpec.
    """

    page_value = parse_int(page, field="page")
    limit_value = parse_int(limit, field="limit")
    window = validate_pagination(
        1 if page_value is None else page_value,
        get_listing_settings().default_limit if limit_value is None else limit_value,
    )

    sort_spec = resolve_sort(sort_by, sort_dir, language)

    day_value = parse_int(day_of_week, field="dayOfWeek")
    if day_value is not None:
        validate_day_of_week(day_value, field="dayOfWeek")

    if open_at is not None:
        open_at = validate_time(open_at.strip(), field="openAt")

    return QueryFilterSpec(
        search=search,
        district=district,
        day_of_week=day_value,
        open_at=open_at,
        mobile_code=mobile_code,
        seq=parse_int(seq, field="seq"),
        page=window.page,
        limit=window.limit,
        sort_by=sort_spec.field,
        sort_dir=sort_spec.direction,
        lang=language,
    )
