"""
Search service backing the location and flight search endpoints.

Location searches degrade quietly: a keyword that is too short, or one the
provider rejects with a 4xx, yields an empty list. Flight searches validate
their input before any token or upstream call is made.
"""

from typing import Any, Dict, List, Optional

import structlog

from ..clients.amadeus_client import AmadeusClient
from ..types import (
    FlightSearchRequest,
    SuggestionItem,
    UpstreamClientError,
    ValidationError,
)
from ..utils.validators import missing_required_fields, validate_airport_code, validate_date
from .airport_catalog import AirportCatalog


logger = structlog.get_logger(__name__)

FIELD_LABELS = {
    "origin": "origin",
    "destination": "destination",
    "departure_date": "departureDate",
    "return_date": "returnDate",
}


class SearchService:
    """Coordinates the airport catalog and the Amadeus client"""

    def __init__(
        self,
        client: AmadeusClient,
        catalog: Optional[AirportCatalog] = None,
        min_keyword_length: int = 2,
    ):
        self.client = client
        self.catalog = catalog
        self.min_keyword_length = min_keyword_length

    async def search_locations(self, keyword: Optional[str]) -> List[SuggestionItem]:
        if not keyword or len(keyword) < self.min_keyword_length:
            return []

        if self.catalog is not None:
            matches = self.catalog.search(keyword)
            if matches:
                logger.debug("Location search served from catalog", keyword=keyword, count=len(matches))
                return matches

        try:
            return await self.client.search_locations(keyword)
        except UpstreamClientError as e:
            logger.warning(
                "Location search rejected upstream, returning no results",
                keyword=keyword,
                status_code=e.status_code,
            )
            return []

    async def search_flights(self, request: FlightSearchRequest) -> Dict[str, Any]:
        missing = missing_required_fields(request.model_dump())
        if missing:
            labels = [FIELD_LABELS[name] for name in missing]
            raise ValidationError(
                f"Missing required fields: {', '.join(labels)}", fields=labels
            )

        invalid = self._malformed_fields(request)
        if invalid:
            labels = [FIELD_LABELS[name] for name in invalid]
            raise ValidationError(
                f"Invalid fields: {', '.join(labels)}", fields=labels
            )

        request = request.model_copy(update={
            "origin": request.origin.strip().upper(),
            "destination": request.destination.strip().upper(),
        })
        return await self.client.search_flight_offers(request)

    @staticmethod
    def _malformed_fields(request: FlightSearchRequest) -> List[str]:
        """Fields present but not a 3-letter code or an ISO date"""
        invalid = [
            name for name in ("origin", "destination")
            if not validate_airport_code(getattr(request, name))
        ]
        invalid.extend(
            name for name in ("departure_date", "return_date")
            if getattr(request, name) is not None and not validate_date(getattr(request, name))
        )
        return invalid
