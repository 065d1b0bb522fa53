"""
app/query/filter_builder.py

Translates a QueryFilterSpec into a RecordFilter.

Clause types combine with AND. Within one text clause the language columns
combine with OR, so a term found in any language variant matches. The store
receives the RecordFilter as-is and decides how to execute it; every clause
also evaluates against an in-memory record through ``matches``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from app.domain.mobile_post import QueryFilterSpec
from app.validators.mobile_post_validator import TIME_PATTERN, time_to_minutes, validate_time
from db.models.mobile_post import LANGUAGE_SUFFIXES

SEARCH_COLUMNS: tuple[str, ...] = tuple(
    f"{field}_{suffix}"
    for field in ("name", "district", "location", "address")
    for suffix in LANGUAGE_SUFFIXES
)
DISTRICT_COLUMNS: tuple[str, ...] = tuple(f"district_{suffix}" for suffix in LANGUAGE_SUFFIXES)


@dataclass(frozen=True)
class ContainsAnyClause:
    """
    Case-insensitive substring match against any of ``columns``.
    """

    columns: tuple[str, ...]
    term: str

    def matches(self, record: Any) -> bool:
        needle = self.term.casefold()
        for column in self.columns:
            value = getattr(record, column, None)
            if value and needle in value.casefold():
                return True
        return False


@dataclass(frozen=True)
class EqualsClause:
    column: str
    value: Any

    def matches(self, record: Any) -> bool:
        return getattr(record, self.column, None) == self.value


@dataclass(frozen=True)
class OpenAtClause:
    """
    Same-day containment: ``open_hour <= time < close_hour``.

    Records missing either hour, or whose close is not after open (overnight
    spans), never match.
    """

    time: str

    @property
    def minute(self) -> int:
        return time_to_minutes(self.time)

    def matches(self, record: Any) -> bool:
        open_hour = getattr(record, "open_hour", None)
        close_hour = getattr(record, "close_hour", None)
        if not _is_time(open_hour) or not _is_time(close_hour):
            return False
        return time_to_minutes(open_hour) <= self.minute < time_to_minutes(close_hour)


FilterClause = Union[ContainsAnyClause, EqualsClause, OpenAtClause]


@dataclass(frozen=True)
class RecordFilter:
    clauses: tuple[FilterClause, ...] = ()

    def matches(self, record: Any) -> bool:
        return all(clause.matches(record) for clause in self.clauses)

    def __bool__(self) -> bool:
        return bool(self.clauses)


def build_filter(spec: QueryFilterSpec) -> RecordFilter:
    clauses: list[FilterClause] = []

    search = (spec.search or "").strip()
    if search:
        clauses.append(ContainsAnyClause(columns=SEARCH_COLUMNS, term=search))

    district = (spec.district or "").strip()
    if district:
        clauses.append(ContainsAnyClause(columns=DISTRICT_COLUMNS, term=district))

    if spec.day_of_week is not None:
        clauses.append(EqualsClause(column="day_of_week_code", value=spec.day_of_week))

    if spec.open_at is not None:
        clauses.append(OpenAtClause(time=validate_time(spec.open_at, field="openAt")))

    mobile_code = (spec.mobile_code or "").strip()
    if mobile_code:
        clauses.append(EqualsClause(column="mobile_code", value=mobile_code))

    if spec.seq is not None:
        clauses.append(EqualsClause(column="seq", value=spec.seq))

    return RecordFilter(clauses=tuple(clauses))


def _is_time(value: Any) -> bool:
    return isinstance(value, str) and TIME_PATTERN.match(value) is not None
