"""
HTTP transport for the inventory API.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0


class InventoryApiClient:
    """
    Thin wrapper around httpx.AsyncClient.

    A custom transport (e.g. httpx.MockTransport) can be supplied for tests.

    Usage:
        async with InventoryApiClient("https://inventory.example.com") as api:
            response = await api.get("/api/licenses")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        headers: Optional[dict] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json", **(headers or {})},
        )

    async def request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        """
        Send a request.

        Raises:
            httpx.HTTPError: On transport failures; HTTP error statuses are returned
        """
        response = await self._client.request(method, path, json=json)
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    async def get(self, path: str) -> httpx.Response:
        return await self.request("GET", path)

    async def post(self, path: str, json: Any = None) -> httpx.Response:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> httpx.Response:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "InventoryApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def json_or_none(response: httpx.Response) -> Any:
    """Decoded JSON body, or None when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return None
