"""
db/models/mobile_post.py

One mobile post office stop: a van visiting a location on a given weekday
between an opening and a closing time, described in three languages.
"""

from __future__ import annotations

from sqlalchemy import Float, Index, Integer, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, ImportAuditMixin

# Logical attributes stored as one column per supported language.
LANGUAGE_GROUPED_FIELDS: tuple[str, ...] = ("name", "district", "location", "address")
LANGUAGE_SUFFIXES: tuple[str, ...] = ("en", "tc", "sc")


class MobilePost(Base, ImportAuditMixin):
    __tablename__ = "mobile_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    mobile_code: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        comment="Upstream van code, e.g. MO1",
    )
    seq: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Stop sequence within the van's weekly route",
    )

    name_en: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name_tc: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name_sc: Mapped[str | None] = mapped_column(String(255), nullable=True)

    district_en: Mapped[str | None] = mapped_column(String(120), nullable=True)
    district_tc: Mapped[str | None] = mapped_column(String(120), nullable=True)
    district_sc: Mapped[str | None] = mapped_column(String(120), nullable=True)

    location_en: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location_tc: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location_sc: Mapped[str | None] = mapped_column(String(500), nullable=True)

    address_en: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address_tc: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address_sc: Mapped[str | None] = mapped_column(String(500), nullable=True)

    open_hour: Mapped[str | None] = mapped_column(
        String(5),
        nullable=True,
        comment="HH:MM, 24-hour clock",
    )
    close_hour: Mapped[str | None] = mapped_column(
        String(5),
        nullable=True,
        comment="HH:MM, 24-hour clock",
    )
    day_of_week_code: Mapped[int | None] = mapped_column(
        SmallInteger,
        nullable=True,
        comment="1 = Monday ... 7 = Sunday",
    )

    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (
        UniqueConstraint("mobile_code", "seq", name="uq_mobile_posts_mobile_code_seq"),
        Index("ix_mobile_posts_district_en", "district_en"),
        Index("ix_mobile_posts_day_of_week_code", "day_of_week_code"),
        Index("ix_mobile_posts_mobile_code", "mobile_code"),
        Index("ix_mobile_posts_seq", "seq"),
    )

    def __repr__(self) -> str:
        return (
            f"<MobilePost id={self.id} mobile_code={self.mobile_code!r} "
            f"seq={self.seq} name_en={self.name_en!r}>"
        )
