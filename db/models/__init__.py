"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.mobile_post import LANGUAGE_GROUPED_FIELDS, LANGUAGE_SUFFIXES, MobilePost

__all__ = [
    "LANGUAGE_GROUPED_FIELDS",
    "LANGUAGE_SUFFIXES",
    "MobilePost",
]
