"""
app/validators/mobile_post_validator.py

Validation for mobile post payloads, query parameters and import rows.

The module-level ``validate_*`` functions return the normalized value or raise
the typed exception for their error code. ``MobilePostValidator`` applies the
same rules to whole payloads and feed rows and reports violations as values
instead of raising.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping

from app.domain.import_report import Accepted, IrregularityReason, Rejected, RowOutcome
from app.domain.mobile_post import (
    DISTRICT_FIELDS,
    MAX_PAGE_LIMIT,
    NAME_FIELDS,
    WRITABLE_FIELD_NAMES,
    Language,
    PageWindow,
)
from app.error_codes import ErrorCode
from app.exceptions import (
    InvalidLanguageError,
    InvalidNumericValueError,
    InvalidParameterError,
    InvalidTimeFormatError,
    MissingRequiredFieldError,
)
from db.models.mobile_post import MobilePost

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_LOOSE_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)
DAY_OF_WEEK_RANGE = (1, 7)
SEQ_RANGE = (-(2**31), 2**31 - 1)

_TEXT_FIELDS: tuple[str, ...] = tuple(
    name
    for name in WRITABLE_FIELD_NAMES
    if name not in {"seq", "day_of_week_code", "latitude", "longitude", "open_hour", "close_hour"}
)

# Column widths of the mobile_posts table.
MAX_TEXT_LENGTHS: dict[str, int] = {
    name: MobilePost.__table__.c[name].type.length for name in _TEXT_FIELDS
}


# ---------------------------------------------------------------------------
# Pure checks (message on failure, None when valid)
# ---------------------------------------------------------------------------


def _time_violation(value: Any, field: str) -> str | None:
    if not isinstance(value, str) or TIME_PATTERN.match(value) is None:
        return f"{field} must be a valid time in HH:MM format (00:00-23:59)."
    return None


def _day_of_week_violation(value: Any, field: str) -> str | None:
    low, high = DAY_OF_WEEK_RANGE
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        return f"{field} must be an integer between {low} and {high}."
    return None


def _coordinate_violation(latitude: Any, longitude: Any) -> str | None:
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        return "latitude and longitude must be provided together."
    for name, value, (low, high) in (
        ("latitude", latitude, LATITUDE_RANGE),
        ("longitude", longitude, LONGITUDE_RANGE),
    ):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"{name} must be a number."
        if not math.isfinite(value) or not low <= value <= high:
            return f"{name} must be between {low:g} and {high:g}."
    return None


def _seq_violation(value: Any) -> str | None:
    low, high = SEQ_RANGE
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        return f"seq must be an integer between {low} and {high}."
    return None


def _too_long(fields: Mapping[str, Any]) -> list[str]:
    return [
        name
        for name, limit in MAX_TEXT_LENGTHS.items()
        if isinstance(fields.get(name), str) and len(fields[name]) > limit
    ]


def _missing_groups(fields: Mapping[str, Any]) -> list[str]:
    missing: list[str] = []
    if not any(_has_text(fields.get(name)) for name in NAME_FIELDS):
        missing.append("name")
    if not any(_has_text(fields.get(name)) for name in DISTRICT_FIELDS):
        missing.append("district")
    return missing


def _has_text(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def _to_int(value: Any) -> int | None:
    """Coerce loosely typed input to int; raise ValueError when not integral."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        parsed = float(text)
        if not parsed.is_integer():
            raise
        return int(parsed)


def _to_float(value: Any) -> float | None:
    """Coerce loosely typed input to float; raise ValueError when not numeric."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return None
    return float(text)


def time_to_minutes(value: str) -> int:
    """
    Minute offset from midnight for a validated ``HH:MM`` string.
    """

    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


# ---------------------------------------------------------------------------
# Raising validators
# ---------------------------------------------------------------------------


def validate_time(value: Any, *, field: str = "time") -> str:
    message = _time_violation(value, field)
    if message is not None:
        raise InvalidTimeFormatError(message, field=field)
    return value


def validate_day_of_week(value: Any, *, field: str = "dayOfWeekCode") -> int:
    message = _day_of_week_violation(value, field)
    if message is not None:
        raise InvalidParameterError(message, field=field)
    return value


def validate_coordinates(latitude: Any, longitude: Any) -> tuple[float, float] | None:
    """
    Validate a latitude/longitude pair; both absent is valid and returns None.
    """

    message = _coordinate_violation(latitude, longitude)
    if message is not None:
        raise InvalidParameterError(message, field="latitude")
    if latitude is None:
        return None
    return float(latitude), float(longitude)


def validate_required_groups(fields: Mapping[str, Any]) -> None:
    """
    Require at least one non-empty name and one non-empty district.
    """

    missing = _missing_groups(fields)
    if missing:
        raise MissingRequiredFieldError(
            ", ".join(f"At least one of {group}EN, {group}TC, {group}SC is required." for group in missing),
            field=missing[0],
        )


def validate_pagination(page: int, limit: int) -> PageWindow:
    if page < 1:
        raise InvalidParameterError("page must be at least 1.", field="page")
    if not 1 <= limit <= MAX_PAGE_LIMIT:
        raise InvalidParameterError(
            f"limit must be between 1 and {MAX_PAGE_LIMIT}.",
            field="limit",
        )
    return PageWindow(page=page, limit=limit)


def validate_language(value: str) -> Language:
    try:
        return Language(value.strip().lower())
    except ValueError as exc:
        raise InvalidLanguageError(
            f"Invalid lang '{value}'. Allowed values: en, tc, sc, all.",
            field="lang",
        ) from exc


def parse_int(value: Any, *, field: str) -> int | None:
    try:
        return _to_int(value)
    except ValueError as exc:
        raise InvalidNumericValueError(f"{field} must be a valid integer.", field=field) from exc


def parse_float(value: Any, *, field: str) -> float | None:
    try:
        return _to_float(value)
    except ValueError as exc:
        raise InvalidNumericValueError(f"{field} must be a valid number.", field=field) from exc


# ---------------------------------------------------------------------------
# Payload / row validator
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldViolation:
    """
    One failed rule for a request body.
    """

    code: ErrorCode
    field: str
    message: str


class MobilePostValidator:
    """
    Applies the per-operation subset of rules to a payload or feed row.
    """

    def validate_payload(
        self,
        fields: Mapping[str, Any],
        *,
        partial: bool,
    ) -> list[FieldViolation]:
        """
        Check a create (``partial=False``) or update (``partial=True``) body.

        ``fields`` uses model attribute names and only holds fields the client
        sent. Updates skip the required-group rule but still have to send
        latitude and longitude together.
        """

        violations: list[FieldViolation] = []

        if not partial:
            try:
                validate_required_groups(fields)
            except MissingRequiredFieldError as exc:
                violations.append(FieldViolation(exc.code, exc.field or "name", exc.message))

        for name in _too_long(fields):
            violations.append(
                FieldViolation(
                    ErrorCode.INVALID_PARAMETER,
                    WRITABLE_FIELD_NAMES[name],
                    f"{WRITABLE_FIELD_NAMES[name]} must be at most {MAX_TEXT_LENGTHS[name]} characters.",
                )
            )

        if fields.get("seq") is not None:
            message = _seq_violation(fields["seq"])
            if message is not None:
                violations.append(FieldViolation(ErrorCode.INVALID_NUMERIC_VALUE, "seq", message))

        for name in ("open_hour", "close_hour"):
            value = fields.get(name)
            if value is None:
                continue
            message = _time_violation(value, WRITABLE_FIELD_NAMES[name])
            if message is not None:
                violations.append(
                    FieldViolation(ErrorCode.INVALID_PARAMETER, WRITABLE_FIELD_NAMES[name], message)
                )

        day = fields.get("day_of_week_code")
        if day is not None:
            message = _day_of_week_violation(day, "dayOfWeekCode")
            if message is not None:
                violations.append(FieldViolation(ErrorCode.INVALID_PARAMETER, "dayOfWeekCode", message))

        sent_latitude = "latitude" in fields
        sent_longitude = "longitude" in fields
        if sent_latitude != sent_longitude:
            violations.append(
                FieldViolation(
                    ErrorCode.INVALID_PARAMETER,
                    "latitude" if sent_latitude else "longitude",
                    "latitude and longitude must be provided together.",
                )
            )
        elif sent_latitude:
            try:
                validate_coordinates(fields["latitude"], fields["longitude"])
            except InvalidParameterError as exc:
                violations.append(FieldViolation(exc.code, exc.field or "latitude", exc.message))

        return violations

    def validate_import_row(self, raw: Any, index: int) -> RowOutcome:
        """
        Normalize one loosely typed feed row and decide whether it is importable.
        """

        if not isinstance(raw, Mapping):
            return Rejected(
                index=index,
                reason=IrregularityReason.INVALID_ROW,
                fields=(),
                message="Row must be an object.",
            )

        fields: dict[str, Any] = {}
        for name in _TEXT_FIELDS:
            value = self._lookup(raw, name)
            fields[name] = str(value).strip() if _has_text(value) else None

        numeric_errors: list[str] = []
        for name, coerce in (
            ("seq", _to_int),
            ("day_of_week_code", _to_int),
            ("latitude", _to_float),
            ("longitude", _to_float),
        ):
            try:
                fields[name] = coerce(self._lookup(raw, name))
            except ValueError:
                numeric_errors.append(WRITABLE_FIELD_NAMES[name])
        if fields.get("seq") is not None and _seq_violation(fields["seq"]) is not None:
            numeric_errors.append("seq")
        if numeric_errors:
            return Rejected(
                index=index,
                reason=IrregularityReason.INVALID_NUMERIC_VALUE,
                fields=tuple(numeric_errors),
                message=f"Not a valid number or out of range: {', '.join(numeric_errors)}.",
            )

        missing = _missing_groups(fields)
        if missing:
            return Rejected(
                index=index,
                reason=IrregularityReason.MISSING_REQUIRED_FIELD,
                fields=tuple(
                    WRITABLE_FIELD_NAMES[f"{group}_{suffix}"]
                    for group in missing
                    for suffix in ("en", "tc", "sc")
                ),
                message=f"Missing required field group(s): {', '.join(missing)}.",
            )

        too_long = _too_long(fields)
        if too_long:
            return Rejected(
                index=index,
                reason=IrregularityReason.VALUE_TOO_LONG,
                fields=tuple(WRITABLE_FIELD_NAMES[name] for name in too_long),
                message="Longer than the column allows: "
                + ", ".join(f"{WRITABLE_FIELD_NAMES[name]} (max {MAX_TEXT_LENGTHS[name]})" for name in too_long)
                + ".",
            )

        bad_times: list[str] = []
        for name in ("open_hour", "close_hour"):
            value = self._normalize_time(self._lookup(raw, name))
            fields[name] = value
            if value is not None and _time_violation(value, name) is not None:
                bad_times.append(WRITABLE_FIELD_NAMES[name])
        if bad_times:
            return Rejected(
                index=index,
                reason=IrregularityReason.INVALID_TIME_FORMAT,
                fields=tuple(bad_times),
                message=f"Not a valid HH:MM time: {', '.join(bad_times)}.",
            )

        day = fields["day_of_week_code"]
        if day is not None:
            message = _day_of_week_violation(day, "dayOfWeekCode")
            if message is not None:
                return Rejected(
                    index=index,
                    reason=IrregularityReason.INVALID_DAY_OF_WEEK,
                    fields=("dayOfWeekCode",),
                    message=message,
                )

        message = _coordinate_violation(fields["latitude"], fields["longitude"])
        if message is not None:
            return Rejected(
                index=index,
                reason=IrregularityReason.INVALID_COORDINATES,
                fields=("latitude", "longitude"),
                message=message,
            )

        return Accepted(index=index, fields=fields)

    @staticmethod
    def _lookup(raw: Mapping[str, Any], name: str) -> Any:
        wire_name = WRITABLE_FIELD_NAMES[name]
        if wire_name in raw:
            return raw[wire_name]
        return raw.get(name)

    @staticmethod
    def _normalize_time(value: Any) -> str | None:
        if not _has_text(value):
            return None
        text = str(value).strip()
        match = _LOOSE_TIME_PATTERN.match(text)
        if match is None:
            return text
        return f"{int(match.group(1)):02d}:{match.group(2)}"
