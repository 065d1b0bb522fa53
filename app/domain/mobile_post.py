"""
app/domain/mobile_post.py

Value objects describing one directory request.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MAX_PAGE_LIMIT = 200


class Language(str, Enum):
    EN = "en"
    TC = "tc"
    SC = "sc"
    ALL = "all"

    @property
    def display_language(self) -> "Language":
        """
        Concrete language used for resolved scalar fields.

        ``all`` resolves its convenience aliases in English.
        """

        return Language.EN if self is Language.ALL else self


class SortField(str, Enum):
    ID = "id"
    SEQ = "seq"
    DISTRICT = "district"
    OPEN_HOUR = "openHour"
    CLOSE_HOUR = "closeHour"
    NAME = "name"

    @property
    def is_virtual(self) -> bool:
        return self in (SortField.NAME, SortField.DISTRICT)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class QueryFilterSpec:
    """
    Everything one list request asks for. Built once, never persisted.
    """

    search: str | None = None
    district: str | None = None
    day_of_week: int | None = None
    open_at: str | None = None
    mobile_code: str | None = None
    seq: int | None = None
    page: int = 1
    limit: int = 20
    sort_by: SortField = SortField.ID
    sort_dir: SortDirection = SortDirection.ASC
    lang: Language = Language.EN


@dataclass(frozen=True)
class PageWindow:
    """
    The `[offset, offset + limit)` slice the store must return.
    """

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# Model attribute -> wire (JSON) name for every client-writable field.
WRITABLE_FIELD_NAMES: dict[str, str] = {
    "mobile_code": "mobileCode",
    "seq": "seq",
    "name_en": "nameEN",
    "name_tc": "nameTC",
    "name_sc": "nameSC",
    "district_en": "districtEN",
    "district_tc": "districtTC",
    "district_sc": "districtSC",
    "location_en": "locationEN",
    "location_tc": "locationTC",
    "location_sc": "locationSC",
    "address_en": "addressEN",
    "address_tc": "addressTC",
    "address_sc": "addressSC",
    "open_hour": "openHour",
    "close_hour": "closeHour",
    "day_of_week_code": "dayOfWeekCode",
    "latitude": "latitude",
    "longitude": "longitude",
}

NAME_FIELDS: tuple[str, ...] = ("name_en", "name_tc", "name_sc")
DISTRICT_FIELDS: tuple[str, ...] = ("district_en", "district_tc", "district_sc")
