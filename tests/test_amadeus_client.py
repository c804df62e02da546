"""
Tests for the Amadeus API client
"""

import httpx
import pytest

from flight_search.clients.amadeus_client import AmadeusClient
from flight_search.clients.token_cache import TokenCache
from flight_search.types import (
    FlightSearchRequest,
    LocationSubType,
    NetworkError,
    UpstreamClientError,
    UpstreamServerError,
)

from conftest import FLIGHT_OFFERS_PATH, LOCATIONS_PATH, TOKEN_PATH, TOKEN_URL, token_response


LOCATIONS_PAYLOAD = {
    "meta": {"count": 2},
    "data": [
        {
            "type": "location",
            "subType": "CITY",
            "name": "BERLIN",
            "id": "CBER",
            "iataCode": "BER",
            "address": {"cityName": "BERLIN", "countryName": "GERMANY"},
        },
        {
            "type": "location",
            "subType": "AIRPORT",
            "name": "BRANDENBURG",
            "id": "ABER",
            "iataCode": "BER",
            "address": {"cityName": "BERLIN", "countryName": "GERMANY"},
        },
    ],
}

OFFERS_PAYLOAD = {
    "meta": {"count": 1},
    "data": [{"id": "1", "price": {"grandTotal": "120.50", "currency": "EUR"}}],
    "dictionaries": {"carriers": {"LH": "LUFTHANSA"}},
}


@pytest.fixture
def amadeus_client(http_client, clock):
    token_cache = TokenCache(
        http_client=http_client,
        token_url=TOKEN_URL,
        client_id="test-client-id",
        client_secret="test-client-secret",
        clock=clock,
    )
    return AmadeusClient(http_client=http_client, token_cache=token_cache)


@pytest.fixture
def token_route(amadeus_mock):
    return amadeus_mock.post(TOKEN_PATH).mock(return_value=token_response("bearer-123"))


class TestLocationSearch:
    """Test location lookups"""

    @pytest.mark.asyncio
    async def test_search_locations_maps_suggestions(self, amadeus_client, amadeus_mock, token_route):
        """Test query parameters, auth header and suggestion mapping"""
        route = amadeus_mock.get(LOCATIONS_PATH).mock(
            return_value=httpx.Response(200, json=LOCATIONS_PAYLOAD)
        )

        suggestions = await amadeus_client.search_locations("berl")

        request = route.calls.last.request
        assert request.headers["authorization"] == "Bearer bearer-123"
        assert request.url.params["keyword"] == "berl"
        assert request.url.params["subType"] == "AIRPORT,CITY"
        assert request.url.params["page[limit]"] == "10"

        assert [s.id for s in suggestions] == ["CBER", "ABER"]
        city = suggestions[0]
        assert city.code == "BER"
        assert city.display_name == "BERLIN"
        assert city.city_name == "BERLIN"
        assert city.country_name == "GERMANY"
        assert city.sub_type == LocationSubType.CITY
        assert city.label == "BERLIN (BER)"

    @pytest.mark.asyncio
    async def test_token_shared_across_calls(self, amadeus_client, amadeus_mock, token_route):
        """Test several provider calls reuse one token"""
        amadeus_mock.get(LOCATIONS_PATH).mock(return_value=httpx.Response(200, json=LOCATIONS_PAYLOAD))
        amadeus_mock.get(FLIGHT_OFFERS_PATH).mock(return_value=httpx.Response(200, json=OFFERS_PAYLOAD))

        await amadeus_client.search_locations("berl")
        await amadeus_client.search_locations("berli")
        await amadeus_client.search_flight_offers(
            FlightSearchRequest(origin="BER", destination="JFK", departure_date="2030-05-01")
        )

        assert token_route.call_count == 1

    @pytest.mark.asyncio
    async def test_client_error_raises_upstream_client_error(self, amadeus_client, amadeus_mock, token_route):
        """Test 4xx responses raise UpstreamClientError"""
        amadeus_mock.get(LOCATIONS_PATH).mock(
            return_value=httpx.Response(400, json={"errors": [{"code": 572, "title": "INVALID OPTION"}]})
        )

        with pytest.raises(UpstreamClientError) as exc_info:
            await amadeus_client.search_locations("zz")

        assert exc_info.value.status_code == 400
        assert "INVALID OPTION" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_server_error_raises_upstream_server_error(self, amadeus_client, amadeus_mock, token_route):
        """Test 5xx responses raise UpstreamServerError"""
        amadeus_mock.get(LOCATIONS_PATH).mock(return_value=httpx.Response(503))

        with pytest.raises(UpstreamServerError) as exc_info:
            await amadeus_client.search_locations("berl")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_connection_error_raises_network_error(self, amadeus_client, amadeus_mock, token_route):
        """Test transport failures raise NetworkError"""
        amadeus_mock.get(LOCATIONS_PATH).mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(NetworkError):
            await amadeus_client.search_locations("berl")


class TestFlightOfferSearch:
    """Test flight offer lookups"""

    @pytest.mark.asyncio
    async def test_one_way_search_parameters(self, amadeus_client, amadeus_mock, token_route):
        """Test itinerary parameters for a one-way search"""
        route = amadeus_mock.get(FLIGHT_OFFERS_PATH).mock(
            return_value=httpx.Response(200, json=OFFERS_PAYLOAD)
        )

        result = await amadeus_client.search_flight_offers(
            FlightSearchRequest(origin="BER", destination="JFK", departure_date="2030-05-01", passengers=2)
        )

        params = route.calls.last.request.url.params
        assert params["originLocationCode"] == "BER"
        assert params["destinationLocationCode"] == "JFK"
        assert params["departureDate"] == "2030-05-01"
        assert params["adults"] == "2"
        assert params["max"] == "10"
        assert "returnDate" not in params

        assert result == {
            "data": OFFERS_PAYLOAD["data"],
            "meta": OFFERS_PAYLOAD["meta"],
            "dictionaries": OFFERS_PAYLOAD["dictionaries"],
        }

    @pytest.mark.asyncio
    async def test_round_trip_includes_return_date(self, amadeus_client, amadeus_mock, token_route):
        """Test returnDate is forwarded when present"""
        route = amadeus_mock.get(FLIGHT_OFFERS_PATH).mock(
            return_value=httpx.Response(200, json={"data": []})
        )

        result = await amadeus_client.search_flight_offers(
            FlightSearchRequest(
                origin="BER", destination="JFK", departure_date="2030-05-01", return_date="2030-05-10"
            )
        )

        assert route.calls.last.request.url.params["returnDate"] == "2030-05-10"
        assert result == {"data": [], "meta": {}, "dictionaries": {}}
