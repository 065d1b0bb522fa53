"""
app/repositories/mobile_post_repository.py

Storage collaborator for mobile post records.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.domain.import_report import DedupKey, dedup_key
from app.domain.mobile_post import Language
from app.exceptions import DuplicateRecordError, RecordNotFoundError
from app.query.filter_builder import (
    ContainsAnyClause,
    EqualsClause,
    FilterClause,
    OpenAtClause,
    RecordFilter,
)
from app.query.language_resolver import column_name
from app.query.sort_resolver import SortSpec
from db.models.mobile_post import MobilePost

logger = logging.getLogger(__name__)

# Byte-order collation keeps HH:MM and resolved text comparisons locale-independent.
_BINARY_COLLATION = "C"


class MobilePostStore(Protocol):
    """
    Contract the directory services rely on.
    """

    def find(
        self,
        record_filter: RecordFilter,
        sort_spec: SortSpec,
        offset: int,
        limit: int,
    ) -> tuple[list[MobilePost], int]: ...

    def get(self, record_id: int) -> MobilePost: ...

    def create(self, fields: Mapping[str, Any]) -> MobilePost: ...

    def update(self, record_id: int, fields: Mapping[str, Any]) -> MobilePost: ...

    def delete(self, record_id: int) -> None: ...

    def existing_dedup_keys(self) -> set[DedupKey]: ...


class MobilePostRepository:
    """
    PostgreSQL-backed MobilePostStore. Each write commits its own transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find(
        self,
        record_filter: RecordFilter,
        sort_spec: SortSpec,
        offset: int,
        limit: int,
    ) -> tuple[list[MobilePost], int]:
        """
        Filter, count, order and window in one statement.

        The total rides along as a window aggregate so rows and count come from
        the same snapshot; a separate count is only issued when the requested
        page is past the end.
        """

        conditions = [_clause_expression(clause) for clause in record_filter.clauses]
        stmt = (
            select(MobilePost, func.count().over().label("total"))
            .where(*conditions)
            .order_by(*_order_by(sort_spec))
            .offset(offset)
            .limit(limit)
        )
        rows = self._session.execute(stmt).all()
        if rows:
            return [row[0] for row in rows], int(rows[0].total)

        count_stmt = select(func.count()).select_from(MobilePost).where(*conditions)
        total = self._session.scalar(count_stmt) or 0
        return [], int(total)

    def get(self, record_id: int) -> MobilePost:
        record = self._session.get(MobilePost, record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    def create(self, fields: Mapping[str, Any]) -> MobilePost:
        record = MobilePost(**fields)
        self._session.add(record)
        self._commit()
        self._session.refresh(record)
        return record

    def update(self, record_id: int, fields: Mapping[str, Any]) -> MobilePost:
        record = self.get(record_id)
        for name, value in fields.items():
            setattr(record, name, value)
        self._commit()
        self._session.refresh(record)
        return record

    def delete(self, record_id: int) -> None:
        record = self.get(record_id)
        self._session.delete(record)
        self._commit()

    def existing_dedup_keys(self) -> set[DedupKey]:
        stmt = select(
            MobilePost.mobile_code,
            MobilePost.seq,
            MobilePost.name_en,
            MobilePost.district_en,
            MobilePost.open_hour,
            MobilePost.day_of_week_code,
        )
        return {dedup_key(row._mapping) for row in self._session.execute(stmt)}

    def _commit(self) -> None:
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            logger.info("Mobile post write rejected by uniqueness constraint: %s", exc.orig)
            raise DuplicateRecordError(
                "A mobile post with the same mobileCode and seq already exists."
            ) from exc
        except SQLAlchemyError:
            self._session.rollback()
            raise


def _clause_expression(clause: FilterClause) -> ColumnElement[bool]:
    if isinstance(clause, ContainsAnyClause):
        pattern = f"%{_escape_like(clause.term)}%"
        return or_(
            *(getattr(MobilePost, column).ilike(pattern, escape="\\") for column in clause.columns)
        )
    if isinstance(clause, EqualsClause):
        return getattr(MobilePost, clause.column) == clause.value
    if isinstance(clause, OpenAtClause):
        return and_(
            MobilePost.open_hour.collate(_BINARY_COLLATION) <= clause.time,
            MobilePost.close_hour.collate(_BINARY_COLLATION) > clause.time,
        )
    raise TypeError(f"Unsupported filter clause: {clause!r}")


def _order_by(sort_spec: SortSpec) -> list[Any]:
    if sort_spec.field.is_virtual:
        expression = _resolved_text_expression(sort_spec.field.value, sort_spec.display_language)
    else:
        expression = getattr(MobilePost, sort_spec.column)
        if sort_spec.column in {"open_hour", "close_hour"}:
            expression = expression.collate(_BINARY_COLLATION)

    ordered = expression.desc() if sort_spec.descending else expression.asc()
    return [ordered.nulls_last(), MobilePost.id.asc()]


def _resolved_text_expression(field: str, language: Language) -> ColumnElement[str]:
    """
    SQL form of the display fallback chain: requested, then English, then ''.
    """

    english = getattr(MobilePost, column_name(field, Language.EN))
    if language is Language.EN:
        resolved = func.coalesce(func.nullif(english, ""), "")
    else:
        requested = getattr(MobilePost, column_name(field, language))
        resolved = func.coalesce(func.nullif(requested, ""), func.nullif(english, ""), "")
    return resolved.collate(_BINARY_COLLATION)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
