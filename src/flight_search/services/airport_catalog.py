"""
Built-in catalog of frequently searched airports.

Location searches are matched against this list before the provider is
queried, so common lookups are answered without spending a token or an
upstream call.
"""

from typing import Iterable, List, Optional

from ..types import SuggestionItem


def _airport(code: str, name: str, city: str, country: str) -> SuggestionItem:
    return SuggestionItem(
        id=code,
        code=code,
        display_name=name,
        city_name=city,
        country_name=country,
    )


DEFAULT_AIRPORTS: List[SuggestionItem] = [
    _airport("DAC", "Hazrat Shahjalal International Airport", "Dhaka", "Bangladesh"),
    _airport("DEL", "Indira Gandhi International Airport", "New Delhi", "India"),
    _airport("JFK", "John F Kennedy International Airport", "New York", "United States"),
    _airport("LHR", "London Heathrow Airport", "London", "United Kingdom"),
    _airport("CDG", "Charles de Gaulle Airport", "Paris", "France"),
    _airport("DXB", "Dubai International Airport", "Dubai", "United Arab Emirates"),
    _airport("LAX", "Los Angeles International Airport", "Los Angeles", "United States"),
    _airport("SIN", "Singapore Changi Airport", "Singapore", "Singapore"),
    _airport("BOM", "Chhatrapati Shivaji International Airport", "Mumbai", "India"),
    _airport("BKK", "Suvarnabhumi Airport", "Bangkok", "Thailand"),
]


class AirportCatalog:
    """Case-insensitive substring lookup over a fixed list of airports"""

    def __init__(self, airports: Optional[Iterable[SuggestionItem]] = None):
        self.airports = list(DEFAULT_AIRPORTS if airports is None else airports)

    def search(self, keyword: str) -> List[SuggestionItem]:
        """Return airports whose name, code or city contains the keyword"""
        needle = keyword.lower()
        if not needle:
            return []
        return [
            airport for airport in self.airports
            if needle in airport.display_name.lower()
            or needle in airport.code.lower()
            or needle in airport.city_name.lower()
        ]
