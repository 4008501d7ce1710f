import asyncio
from typing import Any

import httpx
from loguru import logger

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class BaseClient:
    """
    Base asynchronous HTTP client with opt-in retry logic and logging.

    Only transient failures (connection errors, 429 and 5xx) are retried, and only
    when ``max_retries`` is greater than one.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        max_retries: int = 1,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.headers = headers or {}
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx.AsyncClient instance."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def is_retryable(exc: Exception) -> bool:
        if isinstance(exc, httpx.HTTPStatusError):
            return exc.response.status_code in RETRYABLE_STATUS_CODES
        return isinstance(exc, httpx.RequestError)

    async def _request(self, method: str, url: str, max_tries: int | None = None, **kwargs) -> httpx.Response:
        """Internal request handler with retry logic."""
        client = await self.get_client()
        tries = max_tries or self.max_retries

        for attempt in range(1, tries + 1):
            try:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                if attempt >= tries or not self.is_retryable(e):
                    if tries > 1:
                        logger.error(f"Request failed after {attempt} attempt(s) ({method} {url}): {str(e)}")
                    raise
                wait_time = 0.5 * (2 ** (attempt - 1))  # Exponential backoff
                logger.warning(
                    f"Request failed ({method} {url}): {str(e)}. "
                    f"Retrying in {wait_time}s... (Attempt {attempt}/{tries})"
                )
                await asyncio.sleep(wait_time)

        raise httpx.RequestError("Request failed for unknown reasons")

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs) -> dict[str, Any]:
        """Perform a GET request and return the JSON response."""
        response = await self._request("GET", url, params=params, **kwargs)
        return response.json()
