"""
HTTP API routers
"""

from .search_endpoints import router as search_router, get_search_service

__all__ = [
    "search_router",
    "get_search_service",
]
