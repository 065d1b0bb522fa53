"""
app/domain package marker.
"""

from app.domain.import_report import (
    Accepted,
    DedupKey,
    ImportIrregularity,
    ImportReport,
    IrregularityReason,
    Rejected,
    RowOutcome,
    dedup_key,
)
from app.domain.mobile_post import (
    MAX_PAGE_LIMIT,
    Language,
    PageWindow,
    QueryFilterSpec,
    SortDirection,
    SortField,
)

__all__ = [
    "Accepted",
    "DedupKey",
    "ImportIrregularity",
    "ImportReport",
    "IrregularityReason",
    "Language",
    "MAX_PAGE_LIMIT",
    "PageWindow",
    "QueryFilterSpec",
    "Rejected",
    "RowOutcome",
    "SortDirection",
    "SortField",
    "dedup_key",
]
