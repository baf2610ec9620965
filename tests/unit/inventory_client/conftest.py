"""
Fixtures for client state tests.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urljoin

import httpx
import pytest

from inventory_client.container import create_client_state
from inventory_client.http import InventoryApiClient


class FakeClock:
    """Monotonic clock advanced only by sleeping."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeNavigator:
    """Browser history stand-in."""

    def __init__(self, url: str = "http://inventory.local/"):
        self.url = url
        self.visited: List[str] = []

    def current_url(self) -> str:
        return self.url

    async def goto(self, url: str) -> None:
        self.visited.append(url)
        self.url = urljoin(self.url, url)


class ApiRouter:
    """Answers requests by (method, path) and records every request."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        body: Any = None,
        handler=None,
        text: Optional[str] = None,
    ):
        if handler is None:

            def handler(request, status=status, body=body):
                if text is not None:
                    return httpx.Response(status, text=text)
                if body is None:
                    return httpx.Response(status)
                return httpx.Response(status, json=body)

        self.routes[(method, path)] = handler

    def fail(self, method: str, path: str):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(
                404,
                json={
                    "status": 404,
                    "type": "NotFound",
                    "message": "Resource could not be found.",
                    "details": "",
                },
            )
        return handler(request)

    def targets(self) -> List[str]:
        """Method and raw path (with query) of every request."""
        return [f"{r.method} {r.url.raw_path.decode()}" for r in self.requests]

    def last_body(self) -> Optional[dict]:
        content = self.requests[-1].content
        return json.loads(content) if content else None


@pytest.fixture
def router():
    return ApiRouter()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def navigator():
    return FakeNavigator()


@pytest.fixture
def api(router):
    return InventoryApiClient("http://inventory.local", transport=httpx.MockTransport(router))


@pytest.fixture
def state(api, navigator, clock):
    return create_client_state(api, navigator, clock=clock, sleep=clock.sleep)
