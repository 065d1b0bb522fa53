"""
app/schemas/mobile_post.py

Request bodies and response projections for mobile post endpoints.

Wire names are camelCase; Python attributes stay snake_case through aliases.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.import_report import ImportReport


class MobilePostFields(BaseModel):
    """
    Every client-writable field. Unknown fields are rejected.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    mobile_code: str | None = Field(default=None, alias="mobileCode", max_length=32)
    seq: int | None = None

    name_en: str | None = Field(default=None, alias="nameEN", max_length=255)
    name_tc: str | None = Field(default=None, alias="nameTC", max_length=255)
    name_sc: str | None = Field(default=None, alias="nameSC", max_length=255)

    district_en: str | None = Field(default=None, alias="districtEN", max_length=120)
    district_tc: str | None = Field(default=None, alias="districtTC", max_length=120)
    district_sc: str | None = Field(default=None, alias="districtSC", max_length=120)

    location_en: str | None = Field(default=None, alias="locationEN", max_length=500)
    location_tc: str | None = Field(default=None, alias="locationTC", max_length=500)
    location_sc: str | None = Field(default=None, alias="locationSC", max_length=500)

    address_en: str | None = Field(default=None, alias="addressEN", max_length=500)
    address_tc: str | None = Field(default=None, alias="addressTC", max_length=500)
    address_sc: str | None = Field(default=None, alias="addressSC", max_length=500)

    open_hour: str | None = Field(default=None, alias="openHour")
    close_hour: str | None = Field(default=None, alias="closeHour")
    day_of_week_code: int | None = Field(default=None, alias="dayOfWeekCode")

    latitude: float | None = None
    longitude: float | None = None

    def provided_fields(self) -> dict[str, Any]:
        """
        Fields the client actually sent, keyed by attribute name.
        """

        return self.model_dump(exclude_unset=True)


class MobilePostCreateRequest(MobilePostFields):
    pass


class MobilePostUpdateRequest(MobilePostFields):
    pass


class _RecordView(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    mobile_code: str | None = Field(default=None, alias="mobileCode")
    seq: int | None = None
    open_hour: str | None = Field(default=None, alias="openHour")
    close_hour: str | None = Field(default=None, alias="closeHour")
    day_of_week_code: int | None = Field(default=None, alias="dayOfWeekCode")
    latitude: float | None = None
    longitude: float | None = None
    imported_at: datetime | None = Field(default=None, alias="importedAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class LocalizedMobilePost(_RecordView):
    """
    Projection for one concrete language.
    """

    name: str = ""
    district: str = ""
    location: str = ""
    address: str = ""


class MultilingualMobilePost(_RecordView):
    """
    Projection for ``lang=all``: every language column plus English aliases.
    """

    name: str = ""
    district: str = ""

    name_en: str | None = Field(default=None, alias="nameEN")
    name_tc: str | None = Field(default=None, alias="nameTC")
    name_sc: str | None = Field(default=None, alias="nameSC")
    district_en: str | None = Field(default=None, alias="districtEN")
    district_tc: str | None = Field(default=None, alias="districtTC")
    district_sc: str | None = Field(default=None, alias="districtSC")
    location_en: str | None = Field(default=None, alias="locationEN")
    location_tc: str | None = Field(default=None, alias="locationTC")
    location_sc: str | None = Field(default=None, alias="locationSC")
    address_en: str | None = Field(default=None, alias="addressEN")
    address_tc: str | None = Field(default=None, alias="addressTC")
    address_sc: str | None = Field(default=None, alias="addressSC")


class ImportIrregularityResponse(BaseModel):
    index: int = Field(..., ge=0)
    reason: str
    fields: list[str] = Field(default_factory=list)
    message: str = ""


class ImportReportResponse(BaseModel):
    received: int = Field(..., ge=0)
    imported: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    duplicate: int = Field(..., ge=0)
    flagged: int = Field(..., ge=0)
    irregularities: list[ImportIrregularityResponse] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: ImportReport) -> "ImportReportResponse":
        return cls(
            received=report.received,
            imported=report.imported,
            skipped=report.skipped,
            duplicate=report.duplicates,
            flagged=report.flagged,
            irregularities=[
                ImportIrregularityResponse(
                    index=item.index,
                    reason=item.reason.value,
                    fields=list(item.fields),
                    message=item.message,
                )
                for item in report.irregularities
            ],
        )
