"""
API clients for external services
"""

from .amadeus_client import AmadeusClient
from .token_cache import CachedToken, TokenCache

__all__ = [
    "AmadeusClient",
    "CachedToken",
    "TokenCache",
]
