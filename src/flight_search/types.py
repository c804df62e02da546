"""
Core data types for the flight search service
"""

from enum import Enum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class LocationSubType(str, Enum):
    """Location kinds returned by the reference-data API"""
    AIRPORT = "AIRPORT"
    CITY = "CITY"


# Request and Response Models
class SuggestionItem(BaseModel):
    """One autocomplete suggestion for an airport or city"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Stable identifier for the location")
    code: str = Field(..., description="3-letter IATA location code")
    display_name: str = Field(..., alias="displayName", description="Airport or city name")
    city_name: str = Field("", alias="cityName")
    country_name: str = Field("", alias="countryName")
    sub_type: LocationSubType = Field(LocationSubType.AIRPORT, alias="subType")

    @property
    def label(self) -> str:
        """Human-readable text shown in the search field once selected"""
        return f"{self.city_name or self.display_name} ({self.code})"

    @classmethod
    def from_amadeus(cls, location: Dict[str, Any]) -> "SuggestionItem":
        """Build a suggestion from a raw reference-data location"""
        address = location.get("address") or {}
        code = location.get("iataCode", "")
        sub_type = location.get("subType", LocationSubType.AIRPORT.value)
        return cls(
            id=location.get("id") or code,
            code=code,
            display_name=location.get("name", code),
            city_name=address.get("cityName", ""),
            country_name=address.get("countryName", ""),
            sub_type=sub_type if sub_type in LocationSubType.__members__ else LocationSubType.AIRPORT,
        )


class LocationSearchResponse(BaseModel):
    """Response body of the location search endpoint"""
    data: List[SuggestionItem] = Field(default_factory=list)


class FlightSearchRequest(BaseModel):
    """Flight search submission

    Required fields are optional here so that missing values can be reported
    as a 400 with a readable message instead of a schema error.
    """
    model_config = ConfigDict(populate_by_name=True)

    origin: Optional[str] = None
    destination: Optional[str] = None
    departure_date: Optional[str] = Field(None, alias="departureDate")
    return_date: Optional[str] = Field(None, alias="returnDate")
    passengers: int = Field(1, ge=1, le=9)


class FlightSearchResponse(BaseModel):
    """Flight offers as returned by the provider"""
    data: List[Dict[str, Any]] = Field(default_factory=list)
    meta: Dict[str, Any] = Field(default_factory=dict)
    dictionaries: Dict[str, Any] = Field(default_factory=dict)


# Custom Exceptions
class FlightSearchError(Exception):
    """Base exception for flight search service"""
    pass


class ConfigurationError(FlightSearchError):
    """Exception for missing or invalid startup configuration"""
    pass


class ValidationError(FlightSearchError):
    """Exception for missing or malformed search fields"""
    def __init__(self, message: str, fields: Optional[List[str]] = None):
        self.fields = fields or []
        super().__init__(message)


class AuthError(FlightSearchError):
    """Exception for a failed credential exchange"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class UpstreamError(FlightSearchError):
    """Exception for non-success responses from the provider"""
    def __init__(self, message: str, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class UpstreamClientError(UpstreamError):
    """Provider answered with a 4xx status"""
    pass


class UpstreamServerError(UpstreamError):
    """Provider answered with a 5xx or otherwise unexpected status"""
    pass


class NetworkError(FlightSearchError):
    """Exception for transport failures talking to the provider"""
    pass


class SuggestionFetchError(FlightSearchError):
    """Exception for a failed autocomplete request on the client side"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
