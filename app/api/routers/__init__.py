"""
app/api/routers package marker.
"""

from app.api.routers.mobile_posts import router as mobile_posts_router

__all__ = ["mobile_posts_router"]
