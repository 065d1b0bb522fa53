"""
app/domain/import_report.py

Per-row outcomes and the end-of-run report for bulk imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union


class IrregularityReason(str, Enum):
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_TIME_FORMAT = "invalid_time_format"
    INVALID_DAY_OF_WEEK = "invalid_day_of_week"
    INVALID_COORDINATES = "invalid_coordinates"
    INVALID_NUMERIC_VALUE = "invalid_numeric_value"
    INVALID_ROW = "invalid_row"
    VALUE_TOO_LONG = "value_too_long"
    DUPLICATE = "duplicate"
    OVERNIGHT_SCHEDULE = "overnight_schedule"


# ("code", mobile_code, seq) or ("natural", name_en, district_en, open_hour, day_of_week_code)
DedupKey = tuple[Any, ...]


@dataclass(frozen=True)
class Accepted:
    """
    A row that passed validation; ``fields`` uses model attribute names.
    """

    index: int
    fields: dict[str, Any]


@dataclass(frozen=True)
class Rejected:
    index: int
    reason: IrregularityReason
    fields: tuple[str, ...]
    message: str


RowOutcome = Union[Accepted, Rejected]


@dataclass(frozen=True)
class ImportIrregularity:
    """
    One rejected or flagged input row.
    """

    index: int
    reason: IrregularityReason
    fields: tuple[str, ...] = ()
    message: str = ""


@dataclass(frozen=True)
class ImportReport:
    """
    Write-once summary of one import run.
    """

    received: int
    imported: int
    skipped: int
    duplicates: int
    flagged: int = 0
    irregularities: list[ImportIrregularity] = field(default_factory=list)


def _normalize_key_text(value: Any) -> str | None:
    if value is None:
        return None
    text = " ".join(str(value).split()).casefold()
    return text or None


def dedup_key(fields: Mapping[str, Any]) -> DedupKey:
    """
    Identity of a row for duplicate detection.

    Uses ``(mobile_code, seq)`` when both are known, otherwise the natural
    ``(name_en, district_en, open_hour, day_of_week_code)`` tuple.
    """

    mobile_code = _normalize_key_text(fields.get("mobile_code"))
    seq = fields.get("seq")
    if mobile_code is not None and seq is not None:
        return ("code", mobile_code, seq)
    return (
        "natural",
        _normalize_key_text(fields.get("name_en")),
        _normalize_key_text(fields.get("district_en")),
        fields.get("open_hour"),
        fields.get("day_of_week_code"),
    )
