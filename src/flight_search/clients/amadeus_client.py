"""
Amadeus API Client for location and flight offer lookups
"""

import time
from typing import Any, Dict, List, Optional

import httpx
import structlog

from ..types import (
    FlightSearchRequest,
    NetworkError,
    SuggestionItem,
    UpstreamClientError,
    UpstreamServerError,
)
from .token_cache import TokenCache


logger = structlog.get_logger(__name__)

LOCATIONS_PATH = "/v1/reference-data/locations"
FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"


class AmadeusClient:
    """HTTP client for Amadeus self-service API operations"""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_cache: TokenCache,
        location_limit: int = 10,
        flight_result_limit: int = 10,
    ):
        self.http_client = http_client
        self.token_cache = token_cache
        self.location_limit = location_limit
        self.flight_result_limit = flight_result_limit

    async def search_locations(self, keyword: str) -> List[SuggestionItem]:
        """Search airports and cities matching a keyword"""
        params = {
            "keyword": keyword,
            "subType": "AIRPORT,CITY",
            "page[limit]": str(self.location_limit),
        }
        data = await self._get(LOCATIONS_PATH, params)
        return [SuggestionItem.from_amadeus(location) for location in data.get("data") or []]

    async def search_flight_offers(self, request: FlightSearchRequest) -> Dict[str, Any]:
        """Search flight offers for an itinerary"""
        params = {
            "originLocationCode": request.origin,
            "destinationLocationCode": request.destination,
            "departureDate": request.departure_date,
            "adults": str(request.passengers),
            "max": str(self.flight_result_limit),
        }
        if request.return_date:
            params["returnDate"] = request.return_date

        data = await self._get(FLIGHT_OFFERS_PATH, params)
        return {
            "data": data.get("data") or [],
            "meta": data.get("meta") or {},
            "dictionaries": data.get("dictionaries") or {},
        }

    async def _get(self, path: str, params: Dict[str, str]) -> Dict[str, Any]:
        token = await self.token_cache.acquire_token()
        started = time.perf_counter()

        try:
            response = await self.http_client.get(
                path,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.RequestError as e:
            logger.error("Amadeus request failed", path=path, error=str(e))
            raise NetworkError(f"Connection error: {str(e)}") from e

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "api_call",
            endpoint=path,
            status_code=response.status_code,
            duration_ms=duration_ms,
            success=response.is_success,
        )

        self._raise_for_status(response, path)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamServerError(
                "Invalid JSON from provider", response.status_code, response.text[:500]
            ) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, path: str) -> None:
        if response.is_success:
            return

        body: Optional[str] = response.text[:500]
        if 400 <= response.status_code < 500:
            raise UpstreamClientError(
                f"Provider rejected request to {path}: {response.status_code}",
                response.status_code,
                body,
            )
        raise UpstreamServerError(
            f"Provider error for {path}: {response.status_code}",
            response.status_code,
            body,
        )

    async def close(self):
        """Close the HTTP client"""
        await self.http_client.aclose()
