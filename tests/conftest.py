from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
import requests

from dataverse_client import core
from dataverse_client.shared.auth import reset_auth

BASE_URL = "https://dataverse.example.org/api"
TOKEN = "secret-token"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        text: Optional[str] = None,
        content: Optional[bytes] = None,
    ) -> None:
        self.status_code = status_code
        if content is None:
            if text is None:
                text = json.dumps(body) if body is not None else ""
            content = text.encode("utf-8")
        self.content = content
        self.closed = False

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return json.loads(self.text)

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]

    def close(self) -> None:
        self.closed = True


@dataclass
class Call:
    method: str
    path: str
    headers: Dict[str, str]
    params: Optional[Dict[str, Any]]
    data: Any
    stream: bool


class FakeServer:
    """
    Routes (method, path) to canned responses and records every request.

    Unrouted requests get the server's 404 error envelope.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Union[FakeResponse, List[FakeResponse]]] = {}
        self.calls: List[Call] = []

    def reply(self, method: str, path: str, response: Union[FakeResponse, List[FakeResponse]]) -> None:
        self.routes[(method.upper(), path)] = response

    def ok(self, method: str, path: str, data: Any) -> None:
        self.reply(method, path, FakeResponse(200, {"status": "OK", "data": data}))

    def error(self, method: str, path: str, status_code: int, message: str) -> None:
        self.reply(method, path, FakeResponse(status_code, {"status": "ERROR", "message": message}))

    def calls_to(self, path: str, method: Optional[str] = None) -> List[Call]:
        return [
            c for c in self.calls
            if c.path == path and (method is None or c.method == method.upper())
        ]

    def request(self, method, url, headers=None, params=None, data=None, stream=False, timeout=None):
        assert url.startswith(BASE_URL + "/"), url
        path = url[len(BASE_URL) + 1:]
        self.calls.append(Call(method.upper(), path, dict(headers or {}), params, data, stream))

        response = self.routes.get((method.upper(), path))
        if response is None:
            return FakeResponse(404, {"status": "ERROR", "message": f"'{path}' not found"})
        if isinstance(response, list):
            return response.pop(0) if len(response) > 1 else response[0]
        return response


@pytest.fixture
def server(monkeypatch: pytest.MonkeyPatch) -> FakeServer:
    monkeypatch.setenv("API_URL", BASE_URL)
    monkeypatch.setenv("API_TOKEN", TOKEN)
    reset_auth()

    fake = FakeServer()
    monkeypatch.setattr(core.requests, "request", fake.request)
    yield fake
    reset_auth()
