"""
db/base.py

Declarative base and the audit-timestamp mixin shared by ORM models.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Project-wide declarative base.
    """

    type_annotation_map: dict[type, Any] = {}


class ImportAuditMixin:
    """
    Adds storage-managed ``imported_at`` and ``updated_at`` columns.

    Neither column is ever populated from client input; ``updated_at`` is
    refreshed on every UPDATE via ``onupdate``.
    """

    imported_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )
