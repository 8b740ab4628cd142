from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from shoplist_session import AppState, ClientConfig, MemoryStorage, ShoppingItem, ShoppingSession

BASE_URL = "https://shop.example.test"


class ScriptedServer:
    """MockTransport handler answering from a (method, path) route table.

    Each route holds a queue of answers; the last one keeps being served once
    the queue is down to it. An answer is either ``(status, json)`` or an
    exception class to raise as a transport failure.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self.routes.setdefault((method, path), []).append((status, json))

    def fail(self, method: str, path: str, exc_type: type[httpx.TransportError] = httpx.ConnectError) -> None:
        self.routes.setdefault((method, path), []).append(exc_type)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [req for req in self.requests if req.method == method and req.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": "no route"})
        answer = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(answer, type) and issubclass(answer, Exception):
            raise answer("connection refused", request=request)
        status, payload = answer
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)


@pytest.fixture
def server() -> ScriptedServer:
    return ScriptedServer()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def logged_in_state() -> AppState:
    return AppState(
        list=[ShoppingItem(id="a1", type="milk", count=2, price=1.5)],
        is_logged=True,
        token="T",
        user="u",
    )


@pytest.fixture
def make_session(server: ScriptedServer, storage: MemoryStorage) -> Callable[..., ShoppingSession]:
    def _make(handler: Callable[[httpx.Request], Any] | None = None, **overrides: Any) -> ShoppingSession:
        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler or server))
        return ShoppingSession(
            overrides.get("config", ClientConfig(api_base_url=BASE_URL)),
            storage=overrides.get("storage", storage),
            client=client,
        )

    return _make
