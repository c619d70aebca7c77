"""
Shared HTTP client infrastructure for the standings source.

Provides BaseApiClient with rate limiting, optional retries and error
normalisation. HTTP failures surface as RemoteError (carrying the status
code) and undecodable bodies as ParseError, so callers can tell a bad
response from a bad payload.

Usage:
    class MyClient(BaseApiClient):
        BASE_URL = "https://api.example.com"

        async def get_data(self) -> dict:
            return await self._get("/data")
"""

import asyncio
import json
import logging
import time
from typing import Any

import httpx

from .errors import ParseError, RemoteError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------

class RateLimiter:
    """Simple token bucket rate limiter for async API calls."""

    def __init__(self, requests_per_minute: int = 600):
        self.delay = 60.0 / requests_per_minute
        self._last_request = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until we can make a request."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request
            if elapsed < self.delay:
                await asyncio.sleep(self.delay - elapsed)
            self._last_request = time.monotonic()


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------

class BaseApiClient:
    """
    Async HTTP client base with rate limiting and retries.

    Subclasses set BASE_URL and add source-specific methods.
    Use as an async context manager:

        async with MyClient() as client:
            data = await client._get("/endpoint")

    Or with lazy initialisation (for long-lived services):

        client = MyClient()
        data = await client._get("/endpoint")  # client auto-creates on first use
        await client.close()

    A custom ``transport`` is handed to httpx unchanged, which is how tests
    plug in ``httpx.MockTransport``.
    """

    BASE_URL: str = ""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        requests_per_minute: int = 600,
        timeout: float = 30.0,
        max_retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._default_headers = headers or {"Accept": "application/json"}
        self._default_params = params or {}
        self._rate_limiter = RateLimiter(requests_per_minute)
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # -- Lifecycle -----------------------------------------------------------

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._default_headers,
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )

    async def __aenter__(self) -> "BaseApiClient":
        self._client = self._build_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the HTTP client, lazily creating it if needed."""
        if self._client is None or self._client.is_closed:
            self._client = self._build_client()
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # -- HTTP methods --------------------------------------------------------

    async def _get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a GET request and decode the JSON body.

        Raises:
            RemoteError: Non-success status, or transport failure after retries
            ParseError: Body is not valid JSON
        """
        merged_params = {**self._default_params, **(params or {})}
        last_error: RemoteError | None = None

        for attempt in range(self._max_retries):
            try:
                await self._rate_limiter.acquire()
                response = await self.client.get(path, params=merged_params)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                last_error = RemoteError(f"HTTP error! status: {status}", status=status)
                # Client errors (except 429) are not retryable
                if 400 <= status < 500 and status != 429:
                    logger.error(f"Client error {status} for {path}")
                    raise last_error from e
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning(f"Request failed, retrying in {wait}s: {e}")
                    await asyncio.sleep(wait)
                continue
            except httpx.RequestError as e:
                last_error = RemoteError(f"Request failed: {e}")
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning(f"Request error, retrying in {wait}s: {e}")
                    await asyncio.sleep(wait)
                continue

            try:
                return response.json()
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise ParseError(f"Invalid JSON from {path}: {e}") from e

        logger.error(f"API call failed: {last_error}")
        raise last_error or RemoteError("Request failed after retries")
