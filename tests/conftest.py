from __future__ import annotations

import pytest
import requests
from rich.console import Console

from firstfix import cli, display


_NO_JSON = object()


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=_NO_JSON, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ""

    def json(self):
        if self._payload is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; answers by path from a route table."""

    def __init__(self, routes: dict | None = None):
        self.headers: dict[str, str] = {}
        self.routes = routes or {}
        self.calls: list[tuple[str, dict]] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        path = "/" + url.split("/", 3)[-1]
        result = self.routes.get(path)
        if isinstance(result, Exception):
            raise result
        if result is None:
            return FakeResponse(404, {"error": "not found"})
        return result


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def record_console(monkeypatch):
    rec = Console(record=True, width=120, force_terminal=False, color_system=None)
    monkeypatch.setattr(display, "console", rec)
    monkeypatch.setattr(cli, "console", rec)
    return rec


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError("connection refused")
