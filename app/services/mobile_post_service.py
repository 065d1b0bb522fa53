"""
app/services/mobile_post_service.py

Per-operation orchestration for the mobile post directory.

Validation always runs before the store is touched. Results leave this layer
already projected for the requested language.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Mapping

from app.domain.mobile_post import Language, QueryFilterSpec
from app.error_codes import ErrorCode
from app.exceptions import (
    InvalidNumericValueError,
    InvalidParameterError,
    InvalidTimeFormatError,
    MissingRequiredFieldError,
    NoUpdatableFieldsError,
    ValidationFailure,
)
from app.query.filter_builder import build_filter
from app.query.language_resolver import project_record, project_records
from app.query.paginator import build_page_meta, build_window
from app.query.sort_resolver import SortSpec
from app.repositories.mobile_post_repository import MobilePostStore
from app.schemas.envelope import PageMeta
from app.validators.mobile_post_validator import FieldViolation, MobilePostValidator

logger = logging.getLogger(__name__)

_EXCEPTION_BY_CODE: dict[ErrorCode, type[ValidationFailure]] = {
    ErrorCode.MISSING_REQUIRED_FIELD: MissingRequiredFieldError,
    ErrorCode.INVALID_PARAMETER: InvalidParameterError,
    ErrorCode.INVALID_TIME_FORMAT: InvalidTimeFormatError,
    ErrorCode.INVALID_NUMERIC_VALUE: InvalidNumericValueError,
}


class MobilePostService:
    """
    List, get, create, update and delete mobile posts through a store.
    """

    def __init__(self, *, validator: MobilePostValidator | None = None) -> None:
        self._validator = validator or MobilePostValidator()

    def list_posts(
        self,
        *,
        store: MobilePostStore,
        query: QueryFilterSpec,
    ) -> tuple[list[dict[str, Any]], PageMeta]:
        record_filter = build_filter(query)
        sort_spec = SortSpec(field=query.sort_by, direction=query.sort_dir, language=query.lang)
        window = build_window(query.page, query.limit)

        records, total = store.find(record_filter, sort_spec, window.offset, window.limit)
        return project_records(records, query.lang), build_page_meta(window, total)

    def get_post(
        self,
        *,
        store: MobilePostStore,
        record_id: int,
        language: Language,
    ) -> dict[str, Any]:
        return project_record(store.get(record_id), language)

    def create_post(
        self,
        *,
        store: MobilePostStore,
        fields: Mapping[str, Any],
    ) -> dict[str, Any]:
        """
        Create a record; the response carries every language column.
        """

        normalized = _normalize_fields(fields)
        _raise_for_violations(self._validator.validate_payload(normalized, partial=False))

        record = store.create(normalized)
        logger.info("Mobile post created id=%s mobile_code=%r seq=%s", record.id, record.mobile_code, record.seq)
        return project_record(record, Language.ALL)

    def update_post(
        self,
        *,
        store: MobilePostStore,
        record_id: int,
        fields: Mapping[str, Any],
    ) -> dict[str, Any]:
        """
        Overwrite only the provided fields.
        """

        if not fields:
            raise NoUpdatableFieldsError("Request body must contain at least one updatable field.")

        normalized = _normalize_fields(fields)
        _raise_for_violations(self._validator.validate_payload(normalized, partial=True))

        record = store.update(record_id, normalized)
        logger.info("Mobile post updated id=%s fields=%s", record_id, sorted(normalized))
        return project_record(record, Language.ALL)

    def delete_post(self, *, store: MobilePostStore, record_id: int) -> None:
        store.delete(record_id)
        logger.info("Mobile post deleted id=%s", record_id)


def _normalize_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for name, value in fields.items():
        if isinstance(value, str):
            value = value.strip() or None
        normalized[name] = value
    return normalized


def _raise_for_violations(violations: list[FieldViolation]) -> None:
    if not violations:
        return
    first = violations[0]
    exception_type = _EXCEPTION_BY_CODE.get(first.code, InvalidParameterError)
    raise exception_type(
        ", ".join(violation.message for violation in violations),
        field=first.field,
    )


@lru_cache(maxsize=1)
def get_mobile_post_service() -> MobilePostService:
    return MobilePostService()
