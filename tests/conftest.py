"""
Shared fixtures for flight search tests
"""

import httpx
import pytest
import pytest_asyncio
import respx

from flight_search.config import AmadeusConfig, AutocompleteConfig, Config, LoggingConfig, ServerConfig


BASE_URL = "https://test.api.amadeus.com"
TOKEN_PATH = "/v1/security/oauth2/token"
TOKEN_URL = BASE_URL + TOKEN_PATH
LOCATIONS_PATH = "/v1/reference-data/locations"
FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"


class FakeClock:
    """Monotonic clock the tests can move forward by hand"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def token_response(access_token: str = "token-1", expires_in: int = 1799) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "type": "amadeusOAuth2Token",
            "access_token": access_token,
            "token_type": "Bearer",
            "expires_in": expires_in,
            "state": "approved",
        },
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def amadeus_mock():
    """Mock router for the Amadeus host; unmatched requests fail the test"""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest_asyncio.fixture
async def http_client():
    client = httpx.AsyncClient(base_url=BASE_URL)
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def test_config():
    """Configuration with credentials and the fallback catalog disabled"""
    return Config(
        server=ServerConfig(environment="testing"),
        amadeus=AmadeusConfig(
            client_id="test-client-id",
            client_secret="test-client-secret",
            base_url=BASE_URL,
            use_fallback_catalog=False,
        ),
        autocomplete=AutocompleteConfig(),
        logging=LoggingConfig(format="text"),
    )
