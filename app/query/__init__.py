"""
app/query package marker.

List-request engine: language resolution, filtering, sorting and paging.
"""

from app.query.filter_builder import (
    ContainsAnyClause,
    EqualsClause,
    FilterClause,
    OpenAtClause,
    RecordFilter,
    build_filter,
)
from app.query.language_resolver import project_record, project_records, resolve_text
from app.query.paginator import build_page_meta, build_window, total_pages
from app.query.sort_resolver import SortSpec, resolve_sort

__all__ = [
    "ContainsAnyClause",
    "EqualsClause",
    "FilterClause",
    "OpenAtClause",
    "RecordFilter",
    "SortSpec",
    "build_filter",
    "build_page_meta",
    "build_window",
    "project_record",
    "project_records",
    "resolve_sort",
    "resolve_text",
    "total_pages",
]
