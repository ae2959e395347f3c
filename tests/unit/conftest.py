from __future__ import annotations

import json

import httpx
import pytest

from bizdash_control.app.config import AppConfig
from bizdash_control.app.main import DashboardApp


class FakeDashboardApi:
    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}

    def respond(self, method: str, path: str, status_code: int = 200, payload: object | None = None) -> None:
        self.routes[(method, path)] = (status_code, payload if payload is not None else {"status": "ok"})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, payload = self.routes.get(
            (request.method, request.url.path),
            (404, {"code": "NOT_FOUND", "message": "Not found"}),
        )
        return httpx.Response(status_code, json=payload)

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests if request.content]

    def calls(self, method: str, path: str) -> int:
        return sum(1 for request in self.requests if request.method == method and request.url.path == path)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_api() -> FakeDashboardApi:
    return FakeDashboardApi()


@pytest.fixture
def sink_lines() -> list[str]:
    return []


@pytest.fixture
def dashboard(fake_api: FakeDashboardApi, sink_lines: list[str]) -> DashboardApp:
    config = AppConfig(base_url="https://bizdash.test", timeout_seconds=5, verify_ssl=True, access_token="token-1")
    client = httpx.AsyncClient(base_url="https://bizdash.test", transport=httpx.MockTransport(fake_api.handler))
    return DashboardApp(config, client=client, sink=sink_lines.append)
