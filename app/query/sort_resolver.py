"""
app/query/sort_resolver.py

Maps ``sortBy``/``sortDir`` to a deterministic ordering.

``name`` and ``district`` are virtual keys: they order by the value the client
sees for the request language (English for ``lang=all``). Ties always break on
ascending id, and missing primary values sort last in either direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.domain.mobile_post import Language, SortDirection, SortField
from app.exceptions import InvalidParameterError
from app.query.language_resolver import resolve_text

_COLUMN_BY_FIELD: dict[SortField, str] = {
    SortField.ID: "id",
    SortField.SEQ: "seq",
    SortField.OPEN_HOUR: "open_hour",
    SortField.CLOSE_HOUR: "close_hour",
}


@dataclass(frozen=True)
class SortSpec:
    field: SortField
    direction: SortDirection
    language: Language

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    @property
    def column(self) -> str | None:
        """Physical column for direct keys; None for virtual keys."""
        return _COLUMN_BY_FIELD.get(self.field)

    @property
    def display_language(self) -> Language:
        return self.language.display_language

    def key(self, record: Any) -> Any:
        if self.field.is_virtual:
            return resolve_text(record, self.field.value, self.display_language)
        return getattr(record, self.column, None)

    def apply(self, records: list[Any]) -> list[Any]:
        """
        Order records in memory exactly as the store is expected to.
        """

        by_id = sorted(records, key=lambda record: record.id)
        present = [record for record in by_id if self.key(record) is not None]
        missing = [record for record in by_id if self.key(record) is None]
        # sorted() is stable, so equal keys keep ascending id order.
        present = sorted(present, key=self.key, reverse=self.descending)
        return present + missing


def resolve_sort(
    sort_by: str | None,
    sort_dir: str | None,
    language: Language,
) -> SortSpec:
    field = _parse_field(sort_by)
    direction = _parse_direction(sort_dir)
    return SortSpec(field=field, direction=direction, language=language)


def _parse_field(value: str | None) -> SortField:
    if value is None or not value.strip():
        return SortField.ID
    try:
        return SortField(value.strip())
    except ValueError as exc:
        allowed = ", ".join(field.value for field in SortField)
        raise InvalidParameterError(
            f"Invalid sortBy '{value}'. Allowed values: {allowed}.",
            field="sortBy",
        ) from exc


def _parse_direction(value: str | None) -> SortDirection:
    if value is None or not value.strip():
        return SortDirection.ASC
    try:
        return SortDirection(value.strip().lower())
    except ValueError as exc:
        raise InvalidParameterError(
            f"Invalid sortDir '{value}'. Allowed values: asc, desc.",
            field="sortDir",
        ) from exc
