"""Shared fixtures: an in-memory HTTP transport that records requests."""

from typing import Any, Dict, List, Tuple

import httpx
import pytest

FIXED_TIME = 1700000000.75
FIXED_TIMESTAMP = "1700000000"


class RecordingHandler:
    """Answers every request from a route table and keeps what it saw."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Any] = {}

    def reply(self, method: str, path: str, body: Any, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(
            (request.method, request.url.path), (200, {"code": 200, "data": None})
        )
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def transport(handler: RecordingHandler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


@pytest.fixture
def frozen_clock(monkeypatch):
    """Pin the dispatch clock so signatures are reproducible."""
    monkeypatch.setattr("fxdx.client.time.time", lambda: FIXED_TIME)
    return FIXED_TIMESTAMP
