"""
app/query/language_resolver.py

Resolves language-grouped fields for display.

Fallback chain for a concrete language: requested value if non-empty, else
English if non-empty, else the empty string. The chain never goes further
than English and never fails.
"""

from __future__ import annotations

from typing import Any

from app.domain.mobile_post import Language
from app.schemas.mobile_post import LocalizedMobilePost, MultilingualMobilePost
from db.models.mobile_post import LANGUAGE_GROUPED_FIELDS, LANGUAGE_SUFFIXES

_NEUTRAL_FIELDS: tuple[str, ...] = (
    "id",
    "mobile_code",
    "seq",
    "open_hour",
    "close_hour",
    "day_of_week_code",
    "latitude",
    "longitude",
    "imported_at",
    "updated_at",
)


def column_name(field: str, language: Language) -> str:
    """
    Physical attribute holding ``field`` in ``language`` (e.g. ``name_tc``).
    """

    return f"{field}_{language.display_language.value}"


def resolve_text(record: Any, field: str, language: Language) -> str:
    if field not in LANGUAGE_GROUPED_FIELDS:
        raise ValueError(f"'{field}' is not a language-grouped field.")

    requested = getattr(record, column_name(field, language), None)
    if requested:
        return requested
    english = getattr(record, column_name(field, Language.EN), None)
    return english or ""


def project_record(record: Any, language: Language) -> dict[str, Any]:
    """
    Build the display projection of one stored record.
    """

    neutral = {name: getattr(record, name, None) for name in _NEUTRAL_FIELDS}

    if language is Language.ALL:
        columns = {
            f"{field}_{suffix}": getattr(record, f"{field}_{suffix}", None)
            for field in LANGUAGE_GROUPED_FIELDS
            for suffix in LANGUAGE_SUFFIXES
        }
        view = MultilingualMobilePost(
            **neutral,
            **columns,
            name=resolve_text(record, "name", Language.EN),
            district=resolve_text(record, "district", Language.EN),
        )
    else:
        view = LocalizedMobilePost(
            **neutral,
            **{field: resolve_text(record, field, language) for field in LANGUAGE_GROUPED_FIELDS},
        )

    return view.model_dump(mode="json", by_alias=True)


def project_records(records: list[Any], language: Language) -> list[dict[str, Any]]:
    return [project_record(record, language) for record in records]
