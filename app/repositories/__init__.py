"""
app/repositories package marker.
"""

from app.repositories.mobile_post_repository import MobilePostRepository, MobilePostStore

__all__ = [
    "MobilePostRepository",
    "MobilePostStore",
]
