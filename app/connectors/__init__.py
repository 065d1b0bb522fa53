"""
app/connectors package marker.
"""

from app.connectors.base import BatchSource, HTTPConnector
from app.connectors.mobile_post_feed import JsonFileBatchSource, MobilePostFeedConnector, extract_rows

__all__ = [
    "BatchSource",
    "HTTPConnector",
    "JsonFileBatchSource",
    "MobilePostFeedConnector",
    "extract_rows",
]
