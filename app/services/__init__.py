"""
app/services package marker.
"""

from app.services.mobile_post_import_service import (
    MobilePostImportService,
    get_feed_source,
    get_mobile_post_import_service,
)
from app.services.mobile_post_service import MobilePostService, get_mobile_post_service

__all__ = [
    "MobilePostImportService",
    "MobilePostService",
    "get_feed_source",
    "get_mobile_post_import_service",
    "get_mobile_post_service",
]
