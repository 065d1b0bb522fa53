"""
tests/test_mobile_post_repository.py

SQL translation checks for MobilePostRepository, compiled against the
PostgreSQL dialect without a live database.
"""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from app.domain.mobile_post import Language, SortDirection, SortField
from app.exceptions import DuplicateRecordError
from app.query.filter_builder import ContainsAnyClause, EqualsClause, OpenAtClause
from app.query.sort_resolver import SortSpec
from app.repositories.mobile_post_repository import (
    MobilePostRepository,
    _clause_expression,
    _escape_like,
    _order_by,
)


def _sql(expression: Any) -> str:
    return str(expression.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))


def test_contains_clause_uses_escaped_ilike() -> None:
    compiled = _clause_expression(ContainsAnyClause(columns=("name_en", "name_tc"), term="50%_off")).compile(
        dialect=postgresql.dialect()
    )
    sql = str(compiled)

    assert "ILIKE" in sql
    assert "name_en" in sql and "name_tc" in sql
    assert " OR " in sql
    assert set(compiled.params.values()) == {"%50\\%\\_off%"}


def test_equals_clause() -> None:
    sql = _sql(_clause_expression(EqualsClause(column="day_of_week_code", value=3)))
    assert sql == "mobile_posts.day_of_week_code = 3"


def test_open_at_clause_is_half_open() -> None:
    sql = _sql(_clause_expression(OpenAtClause(time="10:30")))

    assert "mobile_posts.open_hour COLLATE" in sql
    assert "mobile_posts.close_hour COLLATE" in sql
    assert sql.count("'10:30'") == 2
    assert "<=" in sql and " > " in sql


def test_order_by_puts_nulls_last_and_breaks_ties_on_id() -> None:
    clauses = _order_by(SortSpec(SortField.SEQ, SortDirection.DESC, Language.EN))
    sql = [_sql(clause) for clause in clauses]

    assert sql == ["mobile_posts.seq DESC NULLS LAST", "mobile_posts.id ASC"]


def test_order_by_virtual_key_resolves_display_language() -> None:
    clauses = _order_by(SortSpec(SortField.NAME, SortDirection.ASC, Language.SC))
    sql = _sql(clauses[0])

    assert "coalesce" in sql.lower()
    assert sql.index("name_sc") < sql.index("name_en")


def test_escape_like() -> None:
    assert _escape_like("a\\b%c_d") == "a\\\\b\\%c\\_d"


class _StubSession:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.added: list[Any] = []
        self.rolled_back = False

    def add(self, record: Any) -> None:
        self.added.append(record)

    def commit(self) -> None:
        if self.error is not None:
            raise self.error

    def rollback(self) -> None:
        self.rolled_back = True

    def refresh(self, record: Any) -> None:
        record.id = 1


def test_create_maps_integrity_error_to_duplicate() -> None:
    session = _StubSession(IntegrityError("INSERT", {}, Exception("uq_mobile_posts_mobile_code_seq")))
    repository = MobilePostRepository(session)  # type: ignore[arg-type]

    with pytest.raises(DuplicateRecordError):
        repository.create({"mobile_code": "MO1", "seq": 1, "name_en": "x", "district_en": "y"})
    assert session.rolled_back


def test_create_rolls_back_and_reraises_other_errors() -> None:
    session = _StubSession(OperationalError("INSERT", {}, Exception("server closed the connection")))
    repository = MobilePostRepository(session)  # type: ignore[arg-type]

    with pytest.raises(OperationalError):
        repository.create({"name_en": "x", "district_en": "y"})
    assert session.rolled_back


def test_create_returns_refreshed_record() -> None:
    repository = MobilePostRepository(_StubSession())  # type: ignore[arg-type]

    record = repository.create({"name_en": "x", "district_en": "y"})

    assert record.id == 1
    assert record.name_en == "x"
