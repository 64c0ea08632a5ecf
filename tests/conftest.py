"""Shared fixtures: a fake Figma API behind an httpx mock transport."""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from figma_mcp.client import FigmaClient
from figma_mcp.credentials import TenantCredentials

TEST_TOKEN = "figd_test_token"


class FakeFigmaApi:
    """Records every upstream request and answers from a per-path table.

    Routes are keyed by ``(method, path)``; unknown routes answer 404.
    A route value is ``(status, response_kwargs)`` or an exception to raise.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        content: Optional[bytes] = None,
    ) -> None:
        kwargs: Dict[str, Any] = {"headers": headers or {}}
        if content is not None:
            kwargs["content"] = content
        elif json_body is not None:
            kwargs["json"] = json_body
        self.routes[(method, path)] = (status, kwargs)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.routes[(method, path)] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"status": 404, "err": "Not found"})
        if isinstance(route, Exception):
            raise route
        status, kwargs = route
        return httpx.Response(status, **kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def figma_api() -> FakeFigmaApi:
    return FakeFigmaApi()


@pytest.fixture
def credentials() -> TenantCredentials:
    return TenantCredentials(access_token=TEST_TOKEN)


@pytest.fixture
def client(figma_api: FakeFigmaApi, credentials: TenantCredentials) -> FigmaClient:
    return FigmaClient(credentials, transport=figma_api.transport)
