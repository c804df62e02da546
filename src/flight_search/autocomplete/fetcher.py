"""
HTTP fetcher used by the autocomplete coordinator.
"""

from typing import Awaitable, Callable, List, Optional

import httpx
import structlog

from ..types import SuggestionFetchError, SuggestionItem


logger = structlog.get_logger(__name__)

LocationFetcher = Callable[[str], Awaitable[List[SuggestionItem]]]


class HttpLocationFetcher:
    """Calls the local location search endpoint"""

    def __init__(self, endpoint: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0):
        self.endpoint = endpoint
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def __call__(self, keyword: str) -> List[SuggestionItem]:
        try:
            response = await self.client.get(self.endpoint, params={"keyword": keyword})
        except httpx.RequestError as e:
            raise SuggestionFetchError(f"Connection error: {str(e)}") from e

        if not response.is_success:
            raise SuggestionFetchError(
                f"Location search failed: {response.status_code}", response.status_code
            )

        try:
            payload = response.json()
            return [SuggestionItem.model_validate(item) for item in payload.get("data") or []]
        except (ValueError, AttributeError) as e:
            raise SuggestionFetchError(f"Malformed location response: {str(e)}", response.status_code) from e

    async def close(self):
        if self._owns_client:
            await self.client.aclose()
