"""
Shared fixtures.

`make_client` builds a real `TransportClient` over `httpx.MockTransport`, so
adapter tests exercise headers, envelopes and error mapping end to end
without network access.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.http_client import TransportClient
from core.config import AppSettings
from core.session import SessionState

BASE_URL = "http://api.test"


class Recorder:
    """Collects the requests seen by a mock handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


def json_response(payload: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(payload), headers={"Content-Type": "application/json"})


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        api_base_url=BASE_URL,
        access_token=None,
        log_file=None,
        search_debounce_ms=300,
        slow_search_debounce_ms=500,
    )


@pytest.fixture
def session() -> SessionState:
    return SessionState()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_client(settings, session, recorder) -> Callable[..., TransportClient]:
    """Factory: `make_client(handler)` where handler maps request -> response."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> TransportClient:
        def record(request: httpx.Request) -> httpx.Response:
            recorder.requests.append(request)
            return handler(request)

        return TransportClient(settings, session, transport=httpx.MockTransport(record))

    return factory
