"""Fake metrics service for testing."""

from __future__ import annotations

from httpmetrics.adapters.http_metrics import FakeHttpMetrics
from httpmetrics.adapters.metrics_renderer import FakeMetricsRenderer


class FakeMetricsService:
    """In-memory MetricsService stand-in for testing.

    Structurally satisfies the ``MetricsService`` protocol and records the
    lifecycle calls it receives.
    """

    def __init__(
        self,
        http: FakeHttpMetrics | None = None,
        renderer: FakeMetricsRenderer | None = None,
    ) -> None:
        self.http = http or FakeHttpMetrics()
        self.renderer = renderer or FakeMetricsRenderer()
        self.started_on: tuple[str, int] | None = None
        self.stopped = False

    async def start(self, *, host: str, port: int) -> None:
        self.started_on = (host, port)

    async def stop(self) -> None:
        self.stopped = True
