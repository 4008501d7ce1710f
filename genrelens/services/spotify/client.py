from typing import Any

import httpx

from genrelens.core.base_client import BaseClient
from genrelens.core.config import settings
from genrelens.core.errors import AuthError, CatalogError, MalformedResponseError, NotFoundError, TransientError
from genrelens.core.security import bearer_header
from genrelens.core.version import __version__


def _retry_after(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def classify_status_error(exc: httpx.HTTPStatusError) -> CatalogError:
    """Map an HTTP error response from the Web API onto the catalog error taxonomy."""
    response = exc.response
    status = response.status_code
    target = exc.request.url.path

    if status == 401:
        return AuthError(f"Spotify rejected the credential ({status}) for {target}")
    if status in (400, 403, 404):
        return NotFoundError(f"Spotify resource not available ({status}): {target}")
    if status == 429 or status >= 500:
        return TransientError(f"Spotify unavailable ({status}) for {target}", retry_after=_retry_after(response))
    return CatalogError(f"Unexpected Spotify response ({status}) for {target}")


class SpotifyClient(BaseClient):
    """
    Client for the Spotify Web API. Every request carries the bearer credential.
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {
            "User-Agent": f"genrelens/{__version__}",
            "Accept": "application/json",
            "Authorization": bearer_header(token),
        }
        super().__init__(
            base_url=base_url or settings.SPOTIFY_API_URL,
            timeout=timeout if timeout is not None else settings.SPOTIFY_TIMEOUT,
            max_retries=max_retries if max_retries is not None else settings.SPOTIFY_MAX_RETRIES,
            headers=headers,
            transport=transport,
        )

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Override request to translate transport and status failures into catalog errors."""
        try:
            return await super()._request(method, url, **kwargs)
        except httpx.HTTPStatusError as e:
            raise classify_status_error(e) from e
        except httpx.RequestError as e:
            raise TransientError(f"Could not reach Spotify ({method} {url}): {e}") from e

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs) -> dict[str, Any]:
        try:
            data = await super().get(url, params=params, **kwargs)
        except ValueError as e:
            raise MalformedResponseError(f"Spotify returned a non-JSON body for {url}") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Spotify returned {type(data).__name__} instead of an object for {url}")
        return data
