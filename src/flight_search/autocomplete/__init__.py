"""
Client-side autocomplete for location search
"""

from .coordinator import CoordinatorState, PointerRegion, SearchCoordinator, SearchQuery
from .debounce import DebounceTimer
from .fetcher import HttpLocationFetcher, LocationFetcher

__all__ = [
    "CoordinatorState",
    "PointerRegion",
    "SearchCoordinator",
    "SearchQuery",
    "DebounceTimer",
    "HttpLocationFetcher",
    "LocationFetcher",
]
