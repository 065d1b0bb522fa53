"""
app/api/routers/mobile_posts.py

Mobile post directory HTTP endpoints.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_language, get_list_query, get_mobile_post_store
from app.domain.mobile_post import Language, QueryFilterSpec
from app.repositories.mobile_post_repository import MobilePostStore
from app.schemas.envelope import ApiEnvelope, success_response
from app.schemas.mobile_post import (
    ImportReportResponse,
    MobilePostCreateRequest,
    MobilePostUpdateRequest,
)
from app.services.mobile_post_import_service import (
    MobilePostImportService,
    get_feed_source,
    get_mobile_post_import_service,
)
from app.services.mobile_post_service import MobilePostService, get_mobile_post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mobileposts", tags=["mobile-posts"])


@router.get("", response_model=ApiEnvelope)
def list_mobile_posts(
    query: QueryFilterSpec = Depends(get_list_query),
    store: MobilePostStore = Depends(get_mobile_post_store),
    service: MobilePostService = Depends(get_mobile_post_service),
) -> JSONResponse:
    """
    Filtered, sorted and paginated listing projected into one language.
    """

    posts, meta = service.list_posts(store=store, query=query)
    return success_response(f"Found {meta.total} mobile post(s).", posts, meta=meta)


@router.post("/import", response_model=ApiEnvelope)
def import_mobile_posts(
    rows: list[Any] | None = Body(default=None),
    store: MobilePostStore = Depends(get_mobile_post_store),
    import_service: MobilePostImportService = Depends(get_mobile_post_import_service),
) -> JSONResponse:
    """
    Import rows from the request body, or from the configured feed when the
    body is empty.
    """

    if rows is None:
        report = import_service.run_source(source=get_feed_source(), store=store)
    else:
        report = import_service.run(rows=rows, store=store)

    return success_response(
        f"Imported {report.imported} of {report.received} row(s).",
        ImportReportResponse.from_report(report).model_dump(),
    )


@router.get("/{record_id}", response_model=ApiEnvelope)
def get_mobile_post(
    record_id: int,
    language: Language = Depends(get_language),
    store: MobilePostStore = Depends(get_mobile_post_store),
    service: MobilePostService = Depends(get_mobile_post_service),
) -> JSONResponse:
    post = service.get_post(store=store, record_id=record_id, language=language)
    return success_response("Mobile post retrieved successfully.", post)


@router.post("", response_model=ApiEnvelope, status_code=status.HTTP_201_CREATED)
def create_mobile_post(
    payload: MobilePostCreateRequest,
    store: MobilePostStore = Depends(get_mobile_post_store),
    service: MobilePostService = Depends(get_mobile_post_service),
) -> JSONResponse:
    post = service.create_post(store=store, fields=payload.provided_fields())
    return success_response(
        "Mobile post created successfully.",
        post,
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{record_id}", response_model=ApiEnvelope)
@router.patch("/{record_id}", response_model=ApiEnvelope)
def update_mobile_post(
    record_id: int,
    payload: MobilePostUpdateRequest,
    store: MobilePostStore = Depends(get_mobile_post_store),
    service: MobilePostService = Depends(get_mobile_post_service),
) -> JSONResponse:
    """
    Partial update; PUT and PATCH both overwrite only the fields sent.
    """

    post = service.update_post(store=store, record_id=record_id, fields=payload.provided_fields())
    return success_response("Mobile post updated successfully.", post)


@router.delete("/{record_id}", response_model=ApiEnvelope)
def delete_mobile_post(
    record_id: int,
    store: MobilePostStore = Depends(get_mobile_post_store),
    service: MobilePostService = Depends(get_mobile_post_service),
) -> JSONResponse:
    service.delete_post(store=store, record_id=record_id)
    return success_response(f"Mobile post {record_id} deleted successfully.", None)
