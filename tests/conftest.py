"""Shared fixtures for driving ASGI callables without a server."""

from typing import Any

import pytest

from httpmetrics.adapters.http_metrics import FakeHttpMetrics


class SinkRecorder:
    """ASGI ``send`` stand-in that stores every message it receives."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def status(self) -> int | None:
        starts = [m for m in self.messages if m["type"] == "http.response.start"]
        return starts[0]["status"] if starts else None

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.messages if m["type"] == "http.response.body")


def build_scope(
    method: str = "GET",
    path: str = "/users",
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "scheme": "http",
        "query_string": b"",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": ("127.0.0.1", 12345),
        "server": ("testserver", 80),
    }


async def empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


def respond_with(status: int = 200, chunks: tuple[bytes, ...] = ()):
    """Build a downstream ASGI app that sends ``status`` and the given body chunks."""

    async def app(scope, receive, send):
        await send({"type": "http.response.start", "status": status, "headers": []})
        for chunk in chunks:
            await send({"type": "http.response.body", "body": chunk, "more_body": True})
        await send({"type": "http.response.body", "body": b"", "more_body": False})

    return app


@pytest.fixture
def fake_metrics() -> FakeHttpMetrics:
    return FakeHttpMetrics()


@pytest.fixture
def sink() -> SinkRecorder:
    return SinkRecorder()


@pytest.fixture
def make_scope():
    return build_scope


@pytest.fixture
def receive():
    return empty_receive


@pytest.fixture
def downstream():
    return respond_with
