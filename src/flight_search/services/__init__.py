"""
Services module initialization
"""

from .airport_catalog import AirportCatalog, DEFAULT_AIRPORTS
from .search_service import SearchService

__all__ = [
    'AirportCatalog',
    'DEFAULT_AIRPORTS',
    'SearchService',
]
