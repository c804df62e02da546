"""
OAuth2 client-credentials token cache for the Amadeus API.

A single bearer token is shared by every outbound provider call. It is served
from memory until shortly before the provider says it expires, then replaced
by a fresh one. Refreshes are single-flight: concurrent callers that find the
token expired wait for the one exchange in progress instead of starting their
own.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import httpx
import structlog

from ..types import AuthError, NetworkError


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CachedToken:
    """A bearer token and the clock reading after which it must not be used"""
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class TokenCache:
    """
    Obtains, reuses and refreshes the provider access token.

    The HTTP client and clock are injected so one cache can be created per
    application (or per test) instead of living in module state.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_url: str,
        client_id: str,
        client_secret: str,
        safety_margin: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.http_client = http_client
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.safety_margin = safety_margin
        self._clock = clock
        self._token: Optional[CachedToken] = None
        self._refresh_lock = asyncio.Lock()

    @property
    def cached_token(self) -> Optional[CachedToken]:
        return self._token

    async def acquire_token(self) -> str:
        """
        Return a valid access token, fetching a new one only when needed.

        Raises:
            AuthError: the token endpoint rejected the exchange
            NetworkError: the token endpoint could not be reached
        """
        token = self._token
        if token and token.is_valid(self._clock()):
            return token.value

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited
            token = self._token
            if token and token.is_valid(self._clock()):
                logger.debug("Token refreshed by concurrent caller, reusing")
                return token.value

            self._token = await self._fetch_token()
            return self._token.value

    async def _fetch_token(self) -> CachedToken:
        payload = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        started = self._clock()

        try:
            response = await self.http_client.post(
                self.token_url,
                data=payload,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.RequestError as e:
            logger.error("Token request failed", error=str(e), token_url=self.token_url)
            raise NetworkError(f"Connection error: {str(e)}") from e

        if not response.is_success:
            logger.error(
                "Token request rejected",
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise AuthError("Failed to get access token", status_code=response.status_code)

        try:
            data = response.json()
            value = data["access_token"]
            ttl = float(data["expires_in"])
        except (ValueError, KeyError, TypeError) as e:
            logger.error("Malformed token response", error=str(e))
            raise AuthError("Malformed token response", status_code=response.status_code) from e

        now = self._clock()
        token = CachedToken(value=value, expires_at=now + self._usable_lifetime(ttl))

        logger.info(
            "Fetched new access token",
            expires_in=ttl,
            usable_for=round(token.expires_at - now, 3),
            duration_ms=round((now - started) * 1000, 2),
        )
        return token

    def _usable_lifetime(self, ttl: float) -> float:
        # Tokens shorter-lived than the margin still get half their lifetime
        if ttl > self.safety_margin:
            return ttl - self.safety_margin
        return ttl / 2

    def describe(self) -> Dict[str, Any]:
        """Non-secret token status for health reporting"""
        token = self._token
        if token is None:
            return {"has_token": False, "expires_in_seconds": None}
        remaining = token.expires_at - self._clock()
        return {
            "has_token": remaining > 0,
            "expires_in_seconds": max(0, int(remaining)),
        }
