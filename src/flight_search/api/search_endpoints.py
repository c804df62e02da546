"""
Location and flight search endpoints.

These are the local endpoints consumed by the autocomplete coordinator and
the search form; they proxy to Amadeus using the shared token cache.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..services.search_service import SearchService
from ..types import FlightSearchRequest, FlightSearchResponse, LocationSearchResponse


router = APIRouter(prefix="/search", tags=["search"])


def get_search_service(request: Request) -> SearchService:
    """Search service created during application startup"""
    return request.app.state.search_service


@router.get("/locations", response_model=LocationSearchResponse)
async def search_locations(
    keyword: Optional[str] = Query(None, description="Partial airport or city name, or code"),
    search_service: SearchService = Depends(get_search_service),
) -> LocationSearchResponse:
    """
    Autocomplete airports and cities.

    Short keywords and provider-side rejections return an empty list rather
    than an error.
    """
    suggestions = await search_service.search_locations(keyword)
    return LocationSearchResponse(data=suggestions)


@router.post("/flights", response_model=FlightSearchResponse)
async def search_flights(
    search_request: FlightSearchRequest,
    search_service: SearchService = Depends(get_search_service),
) -> FlightSearchResponse:
    """Search flight offers for an origin, destination and travel dates"""
    result = await search_service.search_flights(search_request)
    return FlightSearchResponse(**result)
